"""Repositories: domain objects in, parameterized SQL through the storage adapter out."""

from training_log.repositories.menu import MenuRepository
from training_log.repositories.record import RecordRepository
from training_log.repositories.user import UserRepository

__all__ = ["MenuRepository", "RecordRepository", "UserRepository"]
