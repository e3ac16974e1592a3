"""Database package: base, storage adapters, engine/storage factory."""

from training_log.db.session import create_storage
from training_log.db.storage import (
    InMemoryStorageAdapter,
    RunResult,
    SQLAlchemyStorageAdapter,
    Statement,
    StorageAdapter,
)

__all__ = [
    "InMemoryStorageAdapter",
    "RunResult",
    "SQLAlchemyStorageAdapter",
    "Statement",
    "StorageAdapter",
    "create_storage",
]
