"""Analytics endpoints: dashboard summary, frequency, progress and muscle groups.

Data is loaded through the repositories, narrowed to the last `days` days, then
handed to the pure functions in `training_log.services.analytics`.
"""

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from training_log.api.deps import TrainingContext, get_context
from training_log.core.constants import DEFAULT_ANALYTICS_DAYS, MSG_MENU_NOT_FOUND
from training_log.core.enums import FrequencyType
from training_log.core.errors import NotFoundError
from training_log.schemas.analytics import (
    AnalyticsSummary,
    MonthlyFrequency,
    MuscleGroupStats,
    ProgressPoint,
    WeeklyFrequency,
)
from training_log.schemas.common import ApiResponse
from training_log.services.analytics import (
    calculate_monthly_frequency,
    calculate_muscle_group_stats,
    calculate_progress,
    calculate_weekly_frequency,
    filter_recent_records,
    summarize,
)

router = APIRouter()

Days = Annotated[int, Query(ge=1, le=3650, description="Look-back window in days")]


@router.get("", response_model=ApiResponse[AnalyticsSummary])
async def analytics_summary(days: Days = DEFAULT_ANALYTICS_DAYS, ctx: TrainingContext = Depends(get_context)):
    """Totals plus weekly/monthly frequency and muscle-group stats for the window."""
    records, menus = await asyncio.gather(
        ctx.records.get_all(ctx.user_id),
        ctx.menus.get_all(ctx.user_id),
    )
    return ApiResponse(data=summarize(filter_recent_records(records, days), menus, days))


@router.get("/frequency", response_model=ApiResponse[list[WeeklyFrequency] | list[MonthlyFrequency]])
async def training_frequency(
    frequency_type: FrequencyType = Query(FrequencyType.WEEKLY, alias="type"),
    days: Days = DEFAULT_ANALYTICS_DAYS,
    ctx: TrainingContext = Depends(get_context),
):
    """Sessions per week (Monday start) or per month; empty periods are omitted."""
    recent = filter_recent_records(await ctx.records.get_all(ctx.user_id), days)
    if frequency_type == FrequencyType.MONTHLY:
        return ApiResponse(data=calculate_monthly_frequency(recent))
    return ApiResponse(data=calculate_weekly_frequency(recent))


@router.get("/progress/{menu_id}", response_model=ApiResponse[list[ProgressPoint]])
async def menu_progress(
    menu_id: str,
    days: Days = DEFAULT_ANALYTICS_DAYS,
    ctx: TrainingContext = Depends(get_context),
):
    """Per-session max weight, reps, volume and averages for one menu, oldest first."""
    menu, records = await asyncio.gather(
        ctx.menus.get_by_id(ctx.user_id, menu_id),
        ctx.records.get_by_menu_id(ctx.user_id, menu_id),
    )
    if menu is None:
        raise NotFoundError(MSG_MENU_NOT_FOUND)
    return ApiResponse(data=calculate_progress(filter_recent_records(records, days)))


@router.get("/muscle-groups", response_model=ApiResponse[list[MuscleGroupStats]])
async def muscle_group_stats(days: Days = DEFAULT_ANALYTICS_DAYS, ctx: TrainingContext = Depends(get_context)):
    records, menus = await asyncio.gather(
        ctx.records.get_all(ctx.user_id),
        ctx.menus.get_all(ctx.user_id),
    )
    return ApiResponse(data=calculate_muscle_group_stats(filter_recent_records(records, days), menus))
