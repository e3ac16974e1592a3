"""API router aggregation."""

from fastapi import APIRouter

from training_log.api.endpoints import analytics, auth, health, menus, records, schedule

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(menus.router, prefix="/menus", tags=["menus"])
api_router.include_router(records.router, prefix="/records", tags=["records"])
api_router.include_router(schedule.router, prefix="/schedule", tags=["schedule"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
