"""Auth request/response schemas."""

from datetime import datetime

from training_log.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: str | None = None
    name: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class UserRead(CamelModel):
    id: str
    email: str
    name: str
    created_at: datetime


class AuthResponse(CamelModel):
    success: bool = True
    user: UserRead
    token: str


class MeResponse(CamelModel):
    success: bool = True
    user: UserRead
