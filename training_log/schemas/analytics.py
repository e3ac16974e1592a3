"""Analytics output schemas."""

from datetime import date

from training_log.schemas.common import CamelModel


class WeeklyFrequency(CamelModel):
    week_start_date: date  # Monday of the week
    count: int


class MonthlyFrequency(CamelModel):
    month: str  # YYYY-MM
    count: int


class ProgressPoint(CamelModel):
    date: date
    max_weight: float
    total_reps: int
    volume: float  # sum of weight * reps
    average_weight: float
    average_reps: float


class MuscleGroupStats(CamelModel):
    muscle_group: str
    sessions: int
    total_volume: float
    average_weight: float
    last_trained: date


class AnalyticsSummary(CamelModel):
    days: int
    total_sessions: int
    total_sets: int
    total_volume: float
    active_menus: int
    weekly_frequency: list[WeeklyFrequency]
    monthly_frequency: list[MonthlyFrequency]
    muscle_groups: list[MuscleGroupStats]
