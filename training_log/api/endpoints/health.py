"""Liveness and readiness probes."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from training_log import __version__
from training_log.api.deps import Services, get_services
from training_log.core.errors import StorageError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health():
    """Process is up. Includes built_at when BACKEND_BUILT_AT is set at deploy time."""
    payload: dict = {"status": "ok", "version": __version__}
    if built_at := os.environ.get("BACKEND_BUILT_AT"):
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(services: Services = Depends(get_services)):
    """Storage answers a trivial query; 503 otherwise so load balancers back off."""
    try:
        await services.storage.ping()
    except StorageError:
        logger.warning("Readiness check failed: %s storage unavailable", services.settings.storage_backend)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "storage": services.settings.storage_backend, "database": "unavailable"},
        )
    return {"status": "ok", "storage": services.settings.storage_backend, "database": "connected"}
