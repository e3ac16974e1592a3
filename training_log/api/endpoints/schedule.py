"""Schedule endpoints: menus planned for today or a given weekday."""

from fastapi import APIRouter, Depends

from training_log.api.deps import TrainingContext, get_context
from training_log.core.enums import DayOfWeek
from training_log.schemas.common import ApiResponse
from training_log.schemas.menu import MenuRead

router = APIRouter()


@router.get("/today", response_model=ApiResponse[list[MenuRead]])
async def todays_schedule(ctx: TrainingContext = Depends(get_context)):
    return ApiResponse(data=await ctx.schedule.get_todays_schedule(ctx.user_id))


@router.get("/{day}", response_model=ApiResponse[list[MenuRead]])
async def schedule_by_day(day: DayOfWeek, ctx: TrainingContext = Depends(get_context)):
    return ApiResponse(data=await ctx.schedule.get_schedule_by_day(ctx.user_id, day))
