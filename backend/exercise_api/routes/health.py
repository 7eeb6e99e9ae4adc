"""
Exercise API Backend: Health Check Route
=========================================

What:  Liveness/readiness probe for Docker and load balancers.
How:   Runs SELECT 1 through the DatabaseSessionManager.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from exercise_api import __version__
from exercise_api.database import DatabaseSessionManager, get_db_manager
from exercise_api.schemas.exercise import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> HealthResponse:
    """Report service status and database connectivity."""
    if await db.health_check():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
