"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 if the process is up (liveness)
    - GET /api/health/ready returns 503 if the database is unreachable (readiness)

Design Decisions:
    - Probes answer in their own small shape, outside the success/error envelope
    - Service name and version read from settings so deploys report what they run
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pothole_api.config import get_settings
from pothole_api.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe, including database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
