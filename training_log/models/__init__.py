"""ORM models - import all so Base.metadata is complete for migrations."""

from training_log.models.training import TrainingMenu, TrainingRecord, TrainingSet
from training_log.models.user import User

__all__ = [
    "TrainingMenu",
    "TrainingRecord",
    "TrainingSet",
    "User",
]
