"""Training record CRUD endpoints."""

from fastapi import APIRouter, Depends, Query

from training_log.api.deps import TrainingContext, get_context
from training_log.core.constants import MSG_RECORD_NOT_FOUND
from training_log.core.errors import NotFoundError
from training_log.schemas.common import ApiResponse
from training_log.schemas.record import RecordCreate, RecordRead, RecordUpdate

router = APIRouter()


@router.get("", response_model=ApiResponse[list[RecordRead]])
async def list_records(
    menu_id: str | None = Query(None, alias="menuId"),
    ctx: TrainingContext = Depends(get_context),
):
    """All records (or one menu's), newest date first, sets included."""
    if menu_id:
        return ApiResponse(data=await ctx.records.get_by_menu_id(ctx.user_id, menu_id))
    return ApiResponse(data=await ctx.records.get_all(ctx.user_id))


@router.post("", response_model=ApiResponse[RecordRead], status_code=201)
async def create_record(payload: RecordCreate, ctx: TrainingContext = Depends(get_context)):
    """Log a session; the record and all its sets are stored atomically."""
    return ApiResponse(data=await ctx.records.create(ctx.user_id, payload))


@router.get("/latest/{menu_id}", response_model=ApiResponse[RecordRead | None])
async def get_latest_record(menu_id: str, ctx: TrainingContext = Depends(get_context)):
    """Most recent session for a menu; data is null when none was logged yet."""
    return ApiResponse(data=await ctx.records.get_latest_by_menu_id(ctx.user_id, menu_id))


@router.get("/{record_id}", response_model=ApiResponse[RecordRead])
async def get_record(record_id: str, ctx: TrainingContext = Depends(get_context)):
    record = await ctx.records.get_by_id(ctx.user_id, record_id)
    if record is None:
        raise NotFoundError(MSG_RECORD_NOT_FOUND)
    return ApiResponse(data=record)


@router.put("/{record_id}", response_model=ApiResponse[RecordRead])
async def update_record(record_id: str, payload: RecordUpdate, ctx: TrainingContext = Depends(get_context)):
    """Update comment and/or replace the full set list."""
    return ApiResponse(data=await ctx.records.update(ctx.user_id, record_id, payload))


@router.delete("/{record_id}", response_model=ApiResponse[None])
async def delete_record(record_id: str, ctx: TrainingContext = Depends(get_context)):
    await ctx.records.delete(ctx.user_id, record_id)
    return ApiResponse(message="Record deleted")
