"""Training analytics: frequency buckets, progress series and muscle-group statistics.

Pure functions over records/menus already loaded by the repositories. No I/O;
the same inputs (and the same `now` for the date filters) give the same output.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from training_log.core.constants import MUSCLE_GROUP_KEYWORDS
from training_log.core.enums import MuscleGroup
from training_log.schemas.analytics import (
    AnalyticsSummary,
    MonthlyFrequency,
    MuscleGroupStats,
    ProgressPoint,
    WeeklyFrequency,
)
from training_log.schemas.menu import MenuRead
from training_log.schemas.record import RecordRead, SetRead


def _volume(sets: Iterable[SetRead]) -> float:
    """Sum of weight * reps."""
    return sum(s.weight * s.reps for s in sets)


def week_start(d: date) -> date:
    """Monday of the ISO week containing `d` (a Sunday maps 6 days back)."""
    return d - timedelta(days=d.weekday())


# ── Filters ──────────────────────────────────────────────────────────────

def filter_recent_records(
    records: Sequence[RecordRead],
    days: int,
    now: datetime | None = None,
) -> list[RecordRead]:
    """Records dated on or after (now - days). `now` is read once for the whole call."""
    cutoff = ((now or datetime.now()) - timedelta(days=days)).date()
    return [r for r in records if r.date >= cutoff]


def filter_records_by_date_range(records: Sequence[RecordRead], start: date, end: date) -> list[RecordRead]:
    """Records with start <= date <= end."""
    return [r for r in records if start <= r.date <= end]


# ── Frequency ────────────────────────────────────────────────────────────

def calculate_weekly_frequency(records: Sequence[RecordRead]) -> list[WeeklyFrequency]:
    """Sessions per week (weeks start Monday). Weeks without sessions are omitted."""
    counts: dict[date, int] = {}
    for r in records:
        key = week_start(r.date)
        counts[key] = counts.get(key, 0) + 1
    return [WeeklyFrequency(week_start_date=k, count=v) for k, v in sorted(counts.items())]


def calculate_monthly_frequency(records: Sequence[RecordRead]) -> list[MonthlyFrequency]:
    """Sessions per calendar month (YYYY-MM). Months without sessions are omitted."""
    counts: dict[str, int] = {}
    for r in records:
        key = f"{r.date.year:04d}-{r.date.month:02d}"
        counts[key] = counts.get(key, 0) + 1
    return [MonthlyFrequency(month=k, count=v) for k, v in sorted(counts.items())]


# ── Progress ─────────────────────────────────────────────────────────────

def calculate_progress(records: Sequence[RecordRead]) -> list[ProgressPoint]:
    """Per-session max weight, total reps, volume and averages, oldest first.

    Records without sets are skipped rather than failing the whole series.
    """
    points: list[ProgressPoint] = []
    for r in records:
        if not r.sets:
            continue
        total_reps = sum(s.reps for s in r.sets)
        points.append(
            ProgressPoint(
                date=r.date,
                max_weight=max(s.weight for s in r.sets),
                total_reps=total_reps,
                volume=_volume(r.sets),
                average_weight=sum(s.weight for s in r.sets) / len(r.sets),
                average_reps=total_reps / len(r.sets),
            )
        )
    points.sort(key=lambda p: p.date)
    return points


# ── Muscle groups ────────────────────────────────────────────────────────

def infer_muscle_group(menu_name: str) -> MuscleGroup:
    """Keyword match on the menu name; the first matching group wins."""
    name = menu_name.lower()
    for group, keywords in MUSCLE_GROUP_KEYWORDS:
        if any(k in name for k in keywords):
            return group
    return MuscleGroup.OTHER


@dataclass
class _GroupAccumulator:
    sessions: int = 0
    volume: float = 0.0
    weights: list[float] = field(default_factory=list)
    last_trained: date | None = None


def calculate_muscle_group_stats(
    records: Sequence[RecordRead],
    menus: Sequence[MenuRead],
) -> list[MuscleGroupStats]:
    """Sessions, volume, average set weight and last session per inferred muscle group.

    averageWeight is the mean over every set weight in the group, not a mean of
    per-session means. Records whose menu is unknown, or that have no sets, are
    ignored. Sorted by session count, most trained first.
    """
    menus_by_id = {m.id: m for m in menus}
    groups: dict[MuscleGroup, _GroupAccumulator] = {}
    for r in records:
        menu = menus_by_id.get(r.menu_id)
        if menu is None or not r.sets:
            continue
        acc = groups.setdefault(infer_muscle_group(menu.name), _GroupAccumulator())
        acc.sessions += 1
        acc.volume += _volume(r.sets)
        acc.weights.extend(s.weight for s in r.sets)
        if acc.last_trained is None or r.date > acc.last_trained:
            acc.last_trained = r.date

    stats = [
        MuscleGroupStats(
            muscle_group=group.value,
            sessions=acc.sessions,
            total_volume=acc.volume,
            average_weight=sum(acc.weights) / len(acc.weights) if acc.weights else 0.0,
            last_trained=acc.last_trained,
        )
        for group, acc in groups.items()
    ]
    stats.sort(key=lambda s: s.sessions, reverse=True)
    return stats


# ── Dashboard ────────────────────────────────────────────────────────────

def summarize(records: Sequence[RecordRead], menus: Sequence[MenuRead], days: int) -> AnalyticsSummary:
    """Totals plus every series, for records already narrowed to the `days` window."""
    return AnalyticsSummary(
        days=days,
        total_sessions=len(records),
        total_sets=sum(len(r.sets) for r in records),
        total_volume=sum(_volume(r.sets) for r in records),
        active_menus=len({r.menu_id for r in records}),
        weekly_frequency=calculate_weekly_frequency(records),
        monthly_frequency=calculate_monthly_frequency(records),
        muscle_groups=calculate_muscle_group_stats(records, menus),
    )
