"""Storage adapters: one async query interface over a relational engine or an in-memory store.

Repositories talk to `StorageAdapter` only. SQL is always sent with `:name` bind
parameters through SQLAlchemy `text()`; values are never formatted into the SQL.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from training_log.core.errors import IntegrityViolation, StorageError
from training_log.db.base import Base

logger = logging.getLogger(__name__)

Params = Mapping[str, Any]
Row = dict[str, Any]


@dataclass(frozen=True)
class Statement:
    """One parameterized statement of a batch."""

    sql: str
    params: Params = field(default_factory=dict)


@dataclass(frozen=True)
class RunResult:
    success: bool
    meta: dict[str, Any] = field(default_factory=dict)


class StorageAdapter(Protocol):
    """Uniform interface to a backing store."""

    async def query(self, sql: str, params: Params | None = None) -> list[Row]: ...

    async def first(self, sql: str, params: Params | None = None) -> Row | None: ...

    async def run(self, sql: str, params: Params | None = None) -> RunResult: ...

    async def batch(self, statements: Sequence[Statement]) -> list[RunResult]: ...

    async def initialize(self) -> None: ...

    async def ping(self) -> None: ...

    async def dispose(self) -> None: ...


async def _execute(conn: AsyncConnection, sql: str, params: Params | None) -> Any:
    return await conn.execute(text(sql), dict(params or {}))


class SQLAlchemyStorageAdapter:
    """Adapter over a SQLAlchemy AsyncEngine (asyncpg for PostgreSQL, aiosqlite for SQLite).

    Reads use a plain connection; `run` and `batch` commit through `engine.begin()`,
    so a batch is one transaction and rolls back as a whole on any failure.
    """

    def __init__(self, engine: AsyncEngine, *, create_tables: bool = False):
        self._engine = engine
        self._create_tables = create_tables

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def initialize(self) -> None:
        """Create missing tables when this adapter owns the schema (SQLite / memory)."""
        if not self._create_tables:
            return
        import training_log.models  # noqa: F401 - register all tables on Base.metadata

        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.exception("Schema creation failed")
            raise StorageError("Could not initialize storage") from e

    async def query(self, sql: str, params: Params | None = None) -> list[Row]:
        try:
            async with self._engine.connect() as conn:
                result = await _execute(conn, sql, params)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.exception("Query failed: %s", sql)
            raise StorageError("Storage query failed") from e

    async def first(self, sql: str, params: Params | None = None) -> Row | None:
        try:
            async with self._engine.connect() as conn:
                result = await _execute(conn, sql, params)
                row = result.mappings().first()
                return dict(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.exception("Query failed: %s", sql)
            raise StorageError("Storage query failed") from e

    async def run(self, sql: str, params: Params | None = None) -> RunResult:
        try:
            async with self._engine.begin() as conn:
                result = await _execute(conn, sql, params)
                return RunResult(success=True, meta={"rows_affected": result.rowcount})
        except IntegrityError as e:
            logger.warning("Constraint violated: %s", sql)
            raise IntegrityViolation("Storage write violated a constraint") from e
        except SQLAlchemyError as e:
            logger.exception("Statement failed: %s", sql)
            raise StorageError("Storage write failed") from e

    async def batch(self, statements: Sequence[Statement]) -> list[RunResult]:
        """Execute all statements atomically: either every effect is committed or none is."""
        if not statements:
            return []
        results: list[RunResult] = []
        try:
            async with self._engine.begin() as conn:
                for stmt in statements:
                    result = await _execute(conn, stmt.sql, stmt.params)
                    results.append(RunResult(success=True, meta={"rows_affected": result.rowcount}))
        except IntegrityError as e:
            logger.warning("Batch rolled back on constraint violation: %s", statements[len(results)].sql)
            raise IntegrityViolation("Storage batch violated a constraint; no changes were applied") from e
        except SQLAlchemyError as e:
            logger.exception(
                "Batch rolled back at statement %d of %d: %s",
                len(results) + 1,
                len(statements),
                statements[len(results)].sql,
            )
            raise StorageError("Storage batch failed; no changes were applied") from e
        return results

    async def ping(self) -> None:
        await self.first("SELECT 1 AS ok")

    async def dispose(self) -> None:
        await self._engine.dispose()


class InMemoryStorageAdapter(SQLAlchemyStorageAdapter):
    """Non-persistent store for tests and local runs.

    One SQLite `:memory:` database on a single shared connection (StaticPool);
    the schema is created from the model metadata on `initialize()`. Calls are
    serialized because every caller shares that one connection.
    """

    def __init__(self) -> None:
        engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
        super().__init__(engine, create_tables=True)
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        async with self._lock:
            await super().initialize()

    async def query(self, sql: str, params: Params | None = None) -> list[Row]:
        async with self._lock:
            return await super().query(sql, params)

    async def first(self, sql: str, params: Params | None = None) -> Row | None:
        async with self._lock:
            return await super().first(sql, params)

    async def run(self, sql: str, params: Params | None = None) -> RunResult:
        async with self._lock:
            return await super().run(sql, params)

    async def batch(self, statements: Sequence[Statement]) -> list[RunResult]:
        async with self._lock:
            return await super().batch(statements)
