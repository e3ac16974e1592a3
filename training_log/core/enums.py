"""Shared enums for models and API."""

from enum import Enum


class DayOfWeek(str, Enum):
    """Weekday a menu is scheduled on."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


# Sunday=0 ... Saturday=6, the index used when resolving "today".
DAYS_FROM_SUNDAY: tuple[DayOfWeek, ...] = (
    DayOfWeek.SUNDAY,
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
    DayOfWeek.SATURDAY,
)


class MuscleGroup(str, Enum):
    """Body region inferred from a menu name."""

    CHEST = "Chest"
    LEGS = "Legs"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    ABS = "Abs"
    OTHER = "Other"


class FrequencyType(str, Enum):
    """Bucket size for frequency analytics."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
