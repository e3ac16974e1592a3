"""Helpers shared by the repositories."""

import uuid
from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Fixed-width ISO-8601 UTC timestamp, so text ordering matches time ordering."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def new_id() -> str:
    return str(uuid.uuid4())
