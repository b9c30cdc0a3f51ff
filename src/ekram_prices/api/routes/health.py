"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from ekram_prices.api.dependencies import get_app_settings, get_store
from ekram_prices.application.dto.responses import HealthResponse
from ekram_prices.config import Settings, get_logger
from ekram_prices.core.interfaces import IBlobStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(
    store: IBlobStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Service status with blob store reachability.

    Reports "degraded" instead of failing when the store cannot be listed.
    """
    store_status = "ok"
    try:
        await store.list_keys()
    except Exception as e:
        logger.warning("health_store_unreachable", error=str(e))
        store_status = "unavailable"

    return HealthResponse(
        status="healthy" if store_status == "ok" else "degraded",
        version=settings.app_version,
        store=store_status,
        uptime_seconds=time.time() - _start_time,
    )
