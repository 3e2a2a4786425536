"""
Health check endpoints
"""

import asyncio
import time

from fastapi import APIRouter
from pydantic import BaseModel

from bundle_builder.core.config import settings
from bundle_builder.core.database import check_engine_health
from bundle_builder.core.logging import get_logger
from bundle_builder.domains.shopify.services import active_operation_count

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model"""

    status: str
    service: str
    version: str
    timestamp: float
    checks: dict


@router.get("", response_model=HealthResponse)
async def health_check():
    """Service health with database status and in-flight bundle polls"""
    checks = {"bundle_operations_polling": active_operation_count()}

    try:
        db_healthy = await asyncio.wait_for(
            check_engine_health(), timeout=settings.HEALTH_CHECK_TIMEOUT
        )
    except asyncio.TimeoutError:
        logger.warning("Database health check timed out")
        db_healthy = False

    checks["database"] = "healthy" if db_healthy else "unhealthy"

    return HealthResponse(
        status="healthy" if db_healthy else "degraded",
        service=settings.PROJECT_NAME,
        version=settings.VERSION,
        timestamp=time.time(),
        checks=checks,
    )


@router.get("/live")
async def liveness_check():
    return {"status": "alive"}
