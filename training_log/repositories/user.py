"""User repository: registered accounts."""

from __future__ import annotations

import logging
from typing import Any

from training_log.core.constants import MSG_EMAIL_TAKEN, MSG_USER_NOT_FOUND
from training_log.core.errors import ConflictError, IntegrityViolation, NotFoundError
from training_log.db.storage import StorageAdapter
from training_log.repositories.base import new_id, utc_now_iso
from training_log.schemas.auth import UserRead

logger = logging.getLogger(__name__)


def _row_to_user(row: dict[str, Any]) -> UserRead:
    return UserRead(id=row["id"], email=row["email"], name=row["name"], created_at=row["created_at"])


class UserRepository:
    def __init__(self, storage: StorageAdapter):
        self._storage = storage

    async def create(self, email: str, name: str, password_hash: str) -> UserRead:
        if await self.get_by_email(email) is not None:
            raise ConflictError(MSG_EMAIL_TAKEN)
        user_id = new_id()
        now = utc_now_iso()
        try:
            await self._storage.run(
                "INSERT INTO users (id, email, name, password_hash, created_at, updated_at) "
                "VALUES (:id, :email, :name, :password_hash, :created_at, :updated_at)",
                {
                    "id": user_id,
                    "email": email,
                    "name": name,
                    "password_hash": password_hash,
                    "created_at": now,
                    "updated_at": now,
                },
            )
        except IntegrityViolation as e:
            # A concurrent registration won the unique index after our lookup
            raise ConflictError(MSG_EMAIL_TAKEN) from e
        logger.info("Registered user %s", user_id)
        created = await self.get_by_id(user_id)
        if created is None:
            raise NotFoundError(MSG_USER_NOT_FOUND)
        return created

    async def get_by_email(self, email: str) -> dict[str, Any] | None:
        """Raw row including `password_hash`; only the auth service should see it."""
        return await self._storage.first(
            "SELECT id, email, name, password_hash, created_at FROM users WHERE email = :email",
            {"email": email},
        )

    async def get_by_id(self, user_id: str) -> UserRead | None:
        row = await self._storage.first(
            "SELECT id, email, name, created_at FROM users WHERE id = :id",
            {"id": user_id},
        )
        return _row_to_user(row) if row else None
