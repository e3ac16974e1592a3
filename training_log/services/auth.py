"""Registration, login and bearer-token validation."""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import timedelta

from training_log.core.config import Settings
from training_log.core.constants import (
    EMAIL_PATTERN,
    MIN_PASSWORD_LENGTH,
    MSG_INVALID_CREDENTIALS,
    MSG_INVALID_EMAIL,
    MSG_LOGIN_FIELDS_REQUIRED,
    MSG_PASSWORD_TOO_SHORT,
    MSG_REGISTER_FIELDS_REQUIRED,
    MSG_USER_NOT_FOUND,
)
from training_log.core.errors import AuthError, NotFoundError, ValidationError
from training_log.core.security import (
    build_password_context,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from training_log.repositories.user import UserRepository
from training_log.schemas.auth import LoginRequest, RegisterRequest, UserRead

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(EMAIL_PATTERN)


class AuthService:
    def __init__(self, users: UserRepository, settings: Settings):
        self._users = users
        self._settings = settings
        self._passwords = build_password_context(settings.password_hash_rounds)

    def issue_token(self, user: UserRead) -> str:
        return create_access_token(
            user.id,
            self._settings.jwt_secret,
            algorithm=self._settings.jwt_algorithm,
            expires_delta=timedelta(days=self._settings.jwt_expire_days),
            extra_claims={"email": user.email, "name": user.name},
        )

    def authenticate_token(self, token: str) -> str:
        """Return the user id (token subject) or raise AuthError."""
        payload = decode_access_token(token, self._settings.jwt_secret, algorithm=self._settings.jwt_algorithm)
        return payload["sub"]

    async def register(self, payload: RegisterRequest) -> tuple[UserRead, str]:
        email = (payload.email or "").strip().lower()
        name = (payload.name or "").strip()
        password = payload.password or ""
        if not email or not name or not password:
            raise ValidationError(MSG_REGISTER_FIELDS_REQUIRED)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(MSG_PASSWORD_TOO_SHORT)
        if not _EMAIL_RE.match(email):
            raise ValidationError(MSG_INVALID_EMAIL)

        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, password, self._passwords)
        user = await self._users.create(email, name, password_hash)
        return user, self.issue_token(user)

    async def login(self, payload: LoginRequest) -> tuple[UserRead, str]:
        email = (payload.email or "").strip().lower()
        password = payload.password or ""
        if not email or not password:
            raise ValidationError(MSG_LOGIN_FIELDS_REQUIRED)

        row = await self._users.get_by_email(email)
        if row is None or not await asyncio.to_thread(
            verify_password, password, row["password_hash"], self._passwords
        ):
            logger.warning("Failed login for %s", email)
            raise AuthError(MSG_INVALID_CREDENTIALS)
        user = UserRead(id=row["id"], email=row["email"], name=row["name"], created_at=row["created_at"])
        return user, self.issue_token(user)

    async def get_user(self, user_id: str) -> UserRead:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(MSG_USER_NOT_FOUND)
        return user
