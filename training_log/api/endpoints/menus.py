"""Training menu CRUD endpoints."""

from fastapi import APIRouter, Depends

from training_log.api.deps import TrainingContext, get_context
from training_log.core.constants import MSG_MENU_NOT_FOUND
from training_log.core.errors import NotFoundError
from training_log.schemas.common import ApiResponse
from training_log.schemas.menu import MenuCreate, MenuRead, MenuUpdate

router = APIRouter()


@router.get("", response_model=ApiResponse[list[MenuRead]])
async def list_menus(ctx: TrainingContext = Depends(get_context)):
    """All menus, most recently created first."""
    return ApiResponse(data=await ctx.menus.get_all(ctx.user_id))


@router.post("", response_model=ApiResponse[MenuRead], status_code=201)
async def create_menu(payload: MenuCreate, ctx: TrainingContext = Depends(get_context)):
    return ApiResponse(data=await ctx.menus.create(ctx.user_id, payload))


@router.get("/{menu_id}", response_model=ApiResponse[MenuRead])
async def get_menu(menu_id: str, ctx: TrainingContext = Depends(get_context)):
    menu = await ctx.menus.get_by_id(ctx.user_id, menu_id)
    if menu is None:
        raise NotFoundError(MSG_MENU_NOT_FOUND)
    return ApiResponse(data=menu)


@router.put("/{menu_id}", response_model=ApiResponse[MenuRead])
async def update_menu(menu_id: str, payload: MenuUpdate, ctx: TrainingContext = Depends(get_context)):
    """Partial update: only the fields sent are changed."""
    return ApiResponse(data=await ctx.menus.update(ctx.user_id, menu_id, payload))


@router.delete("/{menu_id}", response_model=ApiResponse[None])
async def delete_menu(menu_id: str, ctx: TrainingContext = Depends(get_context)):
    """Delete a menu together with its records and sets."""
    await ctx.menus.delete(ctx.user_id, menu_id)
    return ApiResponse(message="Menu deleted")
