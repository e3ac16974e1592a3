"""Menu repository: maps training_menus rows to MenuRead and enforces menu invariants."""

from __future__ import annotations

import json
import logging
from typing import Any

from training_log.core.constants import (
    MSG_MENU_NAME_REQUIRED,
    MSG_MENU_NOT_FOUND,
    MSG_SCHEDULED_DAYS_REQUIRED,
)
from training_log.core.enums import DayOfWeek
from training_log.core.errors import NotFoundError, ValidationError
from training_log.db.storage import Statement, StorageAdapter
from training_log.repositories.base import new_id, utc_now_iso
from training_log.schemas.menu import MenuCreate, MenuRead, MenuUpdate

logger = logging.getLogger(__name__)

_SELECT_MENU = (
    "SELECT id, name, description, scheduled_days, created_at, updated_at FROM training_menus"
)
_WEEK_ORDER = list(DayOfWeek)


def _clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError(MSG_MENU_NAME_REQUIRED)
    return name.strip()


def _clean_days(days: list[DayOfWeek] | None) -> list[DayOfWeek]:
    """De-duplicate and store Monday-first; order carries no meaning."""
    if not days:
        raise ValidationError(MSG_SCHEDULED_DAYS_REQUIRED)
    return sorted({DayOfWeek(d) for d in days}, key=_WEEK_ORDER.index)


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    return description.strip() or None


def _row_to_menu(row: dict[str, Any]) -> MenuRead:
    return MenuRead(
        id=row["id"],
        name=row["name"],
        description=row["description"] or "",
        scheduled_days=json.loads(row["scheduled_days"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class MenuRepository:
    """CRUD for a user's training menus. Every call is scoped by `user_id`."""

    def __init__(self, storage: StorageAdapter):
        self._storage = storage

    async def create(self, user_id: str, payload: MenuCreate) -> MenuRead:
        name = _clean_name(payload.name)
        days = _clean_days(payload.scheduled_days)
        now = utc_now_iso()
        menu_id = new_id()
        await self._storage.run(
            "INSERT INTO training_menus (id, user_id, name, description, scheduled_days, created_at, updated_at) "
            "VALUES (:id, :user_id, :name, :description, :scheduled_days, :created_at, :updated_at)",
            {
                "id": menu_id,
                "user_id": user_id,
                "name": name,
                "description": _clean_description(payload.description),
                "scheduled_days": json.dumps([d.value for d in days]),
                "created_at": now,
                "updated_at": now,
            },
        )
        logger.info("Created menu %s for user %s", menu_id, user_id)
        created = await self.get_by_id(user_id, menu_id)
        if created is None:
            raise NotFoundError(MSG_MENU_NOT_FOUND)
        return created

    async def get_all(self, user_id: str) -> list[MenuRead]:
        """Most recently created first."""
        rows = await self._storage.query(
            f"{_SELECT_MENU} WHERE user_id = :user_id ORDER BY created_at DESC, id",
            {"user_id": user_id},
        )
        return [_row_to_menu(r) for r in rows]

    async def get_by_id(self, user_id: str, menu_id: str) -> MenuRead | None:
        row = await self._storage.first(
            f"{_SELECT_MENU} WHERE id = :id AND user_id = :user_id",
            {"id": menu_id, "user_id": user_id},
        )
        return _row_to_menu(row) if row else None

    async def update(self, user_id: str, menu_id: str, payload: MenuUpdate) -> MenuRead:
        """Apply the fields present in `payload`; an empty payload is a no-op (no write)."""
        existing = await self.get_by_id(user_id, menu_id)
        if existing is None:
            raise NotFoundError(MSG_MENU_NOT_FOUND)

        data = payload.model_dump(exclude_unset=True)
        columns: dict[str, Any] = {}
        if "name" in data:
            columns["name"] = _clean_name(data["name"])
        if "description" in data:
            columns["description"] = _clean_description(data["description"])
        if "scheduled_days" in data:
            columns["scheduled_days"] = json.dumps([d.value for d in _clean_days(data["scheduled_days"])])
        if not columns:
            return existing

        columns["updated_at"] = utc_now_iso()
        assignments = ", ".join(f"{col} = :{col}" for col in columns)
        await self._storage.run(
            f"UPDATE training_menus SET {assignments} WHERE id = :id AND user_id = :user_id",
            {**columns, "id": menu_id, "user_id": user_id},
        )
        updated = await self.get_by_id(user_id, menu_id)
        if updated is None:
            raise NotFoundError(MSG_MENU_NOT_FOUND)
        return updated

    async def delete(self, user_id: str, menu_id: str) -> None:
        """Delete the menu with its records and their sets in one atomic batch."""
        if await self.get_by_id(user_id, menu_id) is None:
            raise NotFoundError(MSG_MENU_NOT_FOUND)
        params = {"menu_id": menu_id, "user_id": user_id}
        await self._storage.batch(
            [
                Statement(
                    "DELETE FROM training_sets WHERE record_id IN "
                    "(SELECT id FROM training_records WHERE menu_id = :menu_id AND user_id = :user_id)",
                    params,
                ),
                Statement("DELETE FROM training_records WHERE menu_id = :menu_id AND user_id = :user_id", params),
                Statement("DELETE FROM training_menus WHERE id = :menu_id AND user_id = :user_id", params),
            ]
        )
        logger.info("Deleted menu %s for user %s", menu_id, user_id)

    async def get_by_scheduled_day(self, user_id: str, day: DayOfWeek) -> list[MenuRead]:
        """Menus whose scheduled days include `day`, filtered after loading all."""
        return [m for m in await self.get_all(user_id) if day in m.scheduled_days]
