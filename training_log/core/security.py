"""Security utilities (passwords, JWT)."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

from training_log.core.constants import MSG_INVALID_TOKEN
from training_log.core.errors import AuthError


def build_password_context(rounds: int = 12) -> CryptContext:
    """bcrypt context; `rounds` is the cost factor (12 in production)."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


password_context = build_password_context()


def hash_password(plain: str, context: CryptContext = password_context) -> str:
    return context.hash(plain)


def verify_password(plain: str, hashed: str, context: CryptContext = password_context) -> bool:
    return context.verify(plain, hashed)


def create_access_token(
    subject: str,
    secret: str,
    *,
    algorithm: str = "HS256",
    expires_delta: timedelta = timedelta(days=7),
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Signed bearer token with `sub`, `iat`, `exp` plus any extra claims."""
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {**(extra_claims or {}), "sub": subject, "iat": now, "exp": now + expires_delta}
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, *, algorithm: str = "HS256") -> dict[str, Any]:
    """Validate signature and expiry; raise AuthError on any failure."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm], options={"require": ["sub", "exp"]})
    except jwt.PyJWTError as e:
        raise AuthError(MSG_INVALID_TOKEN) from e
    if not isinstance(payload.get("sub"), str) or not payload["sub"]:
        raise AuthError(MSG_INVALID_TOKEN)
    return payload
