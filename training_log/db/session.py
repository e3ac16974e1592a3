"""Async database engine and storage factory."""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from training_log.core.config import Settings
from training_log.db.storage import InMemoryStorageAdapter, SQLAlchemyStorageAdapter, StorageAdapter


def create_engine(settings: Settings) -> AsyncEngine:
    """Engine for the configured relational backend (pool tuning applies to PostgreSQL)."""
    if settings.storage_backend == "postgres":
        return create_async_engine(
            settings.async_database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
            echo=settings.debug,
        )
    return create_async_engine(settings.async_database_url, echo=settings.debug)


def create_storage(settings: Settings) -> StorageAdapter:
    """Resolve the storage backend once, at application startup."""
    if settings.storage_backend == "memory":
        return InMemoryStorageAdapter()
    # PostgreSQL schema is managed by Alembic; SQLite files may bootstrap themselves.
    create_tables = settings.storage_backend == "sqlite" and settings.create_tables
    return SQLAlchemyStorageAdapter(create_engine(settings), create_tables=create_tables)
