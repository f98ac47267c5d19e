"""Health and readiness check routes."""

import logging

from fastapi import APIRouter, Depends, Request

from dependencies import get_cache
from services.cache import CacheStore

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "injury-cache"


@router.get("/ready")
async def ready(request: Request) -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": SERVICE_NAME, "commit": request.app.state.settings.git_sha}


@router.get("/health")
async def health(request: Request, cache: CacheStore = Depends(get_cache)) -> dict:
    """Deep health check that verifies cache connectivity."""
    result = {
        "status": "ok",
        "service": SERVICE_NAME,
        "commit": request.app.state.settings.git_sha,
        "cache": "not_tested",
    }

    if await cache.ping():
        result["cache"] = "connected"
    else:
        logger.warning("Cache health check failed")
        result["cache"] = "error"

    return result
