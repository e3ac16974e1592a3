"""Record repository: training_records + training_sets rows to RecordRead.

A record and its sets are always written together in one storage batch, so a
record is never visible without its sets (or with a half-replaced set list).
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Any

from training_log.core.constants import (
    MSG_MENU_NOT_FOUND,
    MSG_RECORD_NOT_FOUND,
    MSG_REPS_POSITIVE,
    MSG_SETS_REQUIRED,
    MSG_WEIGHT_POSITIVE,
)
from training_log.core.errors import NotFoundError, ValidationError
from training_log.db.storage import Params, Statement, StorageAdapter
from training_log.repositories.base import new_id, utc_now_iso
from training_log.schemas.record import RecordCreate, RecordRead, RecordUpdate, SetCreate, SetRead

logger = logging.getLogger(__name__)

_SELECT_RECORD = "SELECT r.id, r.menu_id, r.date, r.comment, r.created_at, r.updated_at FROM training_records r"
# Newest date first; same-day records newest-created first, id as the final tie-break.
_RECORD_ORDER = "ORDER BY r.date DESC, r.created_at DESC, r.id DESC"
_SELECT_SETS = (
    "SELECT s.id, s.record_id, s.weight, s.reps, s.duration, s.rest_time, s.set_order "
    "FROM training_sets s JOIN training_records r ON r.id = s.record_id"
)
_INSERT_SET = (
    "INSERT INTO training_sets (id, record_id, weight, reps, duration, rest_time, set_order) "
    "VALUES (:id, :record_id, :weight, :reps, :duration, :rest_time, :set_order)"
)


def validate_sets(sets: list[SetCreate] | None) -> list[SetCreate]:
    """Reject an empty list, a non-positive or non-finite weight, or non-positive reps.

    The first offending set wins.
    """
    if not sets:
        raise ValidationError(MSG_SETS_REQUIRED)
    for s in sets:
        if not math.isfinite(s.weight) or s.weight <= 0:
            raise ValidationError(MSG_WEIGHT_POSITIVE)
        if s.reps <= 0:
            raise ValidationError(MSG_REPS_POSITIVE)
    return sets


def _set_inserts(record_id: str, sets: list[SetCreate]) -> list[Statement]:
    return [
        Statement(
            _INSERT_SET,
            {
                "id": new_id(),
                "record_id": record_id,
                "weight": float(s.weight),
                "reps": int(s.reps),
                "duration": s.duration,
                "rest_time": s.rest_time,
                "set_order": position,
            },
        )
        for position, s in enumerate(sets, start=1)
    ]


def _row_to_set(row: dict[str, Any]) -> SetRead:
    return SetRead(
        id=row["id"],
        weight=float(row["weight"]),
        reps=int(row["reps"]),
        duration=row["duration"],
        rest_time=row["rest_time"],
    )


def _row_to_record(row: dict[str, Any], sets: list[SetRead]) -> RecordRead:
    return RecordRead(
        id=row["id"],
        menu_id=row["menu_id"],
        date=row["date"],
        sets=sets,
        comment=row["comment"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class RecordRepository:
    """CRUD for a user's training records, sets always populated."""

    def __init__(self, storage: StorageAdapter):
        self._storage = storage

    async def _menu_exists(self, user_id: str, menu_id: str) -> bool:
        row = await self._storage.first(
            "SELECT id FROM training_menus WHERE id = :menu_id AND user_id = :user_id",
            {"menu_id": menu_id, "user_id": user_id},
        )
        return row is not None

    async def _sets_for_record(self, record_id: str) -> list[SetRead]:
        rows = await self._storage.query(
            f"{_SELECT_SETS} WHERE s.record_id = :record_id ORDER BY s.set_order",
            {"record_id": record_id},
        )
        return [_row_to_set(r) for r in rows]

    async def _fetch_many(self, where: str, params: Params) -> list[RecordRead]:
        """Records matching `where` (on alias `r`) plus all their sets in one extra query."""
        rows = await self._storage.query(f"{_SELECT_RECORD} WHERE {where} {_RECORD_ORDER}", params)
        if not rows:
            return []
        set_rows = await self._storage.query(
            f"{_SELECT_SETS} WHERE {where} ORDER BY s.record_id, s.set_order", params
        )
        sets_by_record: dict[str, list[SetRead]] = defaultdict(list)
        for sr in set_rows:
            sets_by_record[sr["record_id"]].append(_row_to_set(sr))
        return [_row_to_record(r, sets_by_record.get(r["id"], [])) for r in rows]

    async def create(self, user_id: str, payload: RecordCreate) -> RecordRead:
        sets = validate_sets(payload.sets)
        if not await self._menu_exists(user_id, payload.menu_id):
            raise NotFoundError(MSG_MENU_NOT_FOUND)

        now = utc_now_iso()
        record_id = new_id()
        statements = [
            Statement(
                "INSERT INTO training_records (id, user_id, menu_id, date, comment, created_at, updated_at) "
                "VALUES (:id, :user_id, :menu_id, :date, :comment, :created_at, :updated_at)",
                {
                    "id": record_id,
                    "user_id": user_id,
                    "menu_id": payload.menu_id,
                    "date": payload.date.isoformat(),
                    "comment": payload.comment,
                    "created_at": now,
                    "updated_at": now,
                },
            ),
            *_set_inserts(record_id, sets),
        ]
        await self._storage.batch(statements)
        logger.info("Created record %s (%d sets) for menu %s", record_id, len(sets), payload.menu_id)

        created = await self.get_by_id(user_id, record_id)
        if created is None:
            raise NotFoundError(MSG_RECORD_NOT_FOUND)
        return created

    async def update(self, user_id: str, record_id: str, payload: RecordUpdate) -> RecordRead:
        """Overwrite comment if present; replace the whole set list if present."""
        existing = await self.get_by_id(user_id, record_id)
        if existing is None:
            raise NotFoundError(MSG_RECORD_NOT_FOUND)

        data = payload.model_dump(exclude_unset=True)
        replacement = validate_sets(payload.sets) if "sets" in data else None

        columns: dict[str, Any] = {"updated_at": utc_now_iso()}
        if "comment" in data:
            columns["comment"] = data["comment"]
        assignments = ", ".join(f"{col} = :{col}" for col in columns)
        statements = [
            Statement(
                f"UPDATE training_records SET {assignments} WHERE id = :id AND user_id = :user_id",
                {**columns, "id": record_id, "user_id": user_id},
            )
        ]
        if replacement is not None:
            statements.append(
                Statement("DELETE FROM training_sets WHERE record_id = :record_id", {"record_id": record_id})
            )
            statements.extend(_set_inserts(record_id, replacement))
        await self._storage.batch(statements)

        updated = await self.get_by_id(user_id, record_id)
        if updated is None:
            raise NotFoundError(MSG_RECORD_NOT_FOUND)
        return updated

    async def get_by_id(self, user_id: str, record_id: str) -> RecordRead | None:
        row = await self._storage.first(
            f"{_SELECT_RECORD} WHERE r.id = :id AND r.user_id = :user_id",
            {"id": record_id, "user_id": user_id},
        )
        if row is None:
            return None
        return _row_to_record(row, await self._sets_for_record(record_id))

    async def get_by_menu_id(self, user_id: str, menu_id: str) -> list[RecordRead]:
        return await self._fetch_many(
            "r.menu_id = :menu_id AND r.user_id = :user_id", {"menu_id": menu_id, "user_id": user_id}
        )

    async def get_latest_by_menu_id(self, user_id: str, menu_id: str) -> RecordRead | None:
        """Same ordering as get_by_menu_id, first row only."""
        row = await self._storage.first(
            f"{_SELECT_RECORD} WHERE r.menu_id = :menu_id AND r.user_id = :user_id {_RECORD_ORDER} LIMIT 1",
            {"menu_id": menu_id, "user_id": user_id},
        )
        if row is None:
            return None
        return _row_to_record(row, await self._sets_for_record(row["id"]))

    async def get_all(self, user_id: str) -> list[RecordRead]:
        return await self._fetch_many("r.user_id = :user_id", {"user_id": user_id})

    async def delete(self, user_id: str, record_id: str) -> None:
        if await self.get_by_id(user_id, record_id) is None:
            raise NotFoundError(MSG_RECORD_NOT_FOUND)
        await self._storage.batch(
            [
                Statement("DELETE FROM training_sets WHERE record_id = :record_id", {"record_id": record_id}),
                Statement(
                    "DELETE FROM training_records WHERE id = :record_id AND user_id = :user_id",
                    {"record_id": record_id, "user_id": user_id},
                ),
            ]
        )
        logger.info("Deleted record %s for user %s", record_id, user_id)
