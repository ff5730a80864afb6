"""
TextShelf Backend - Health Check Route
========================================

What:  Liveness endpoint for container health checks and monitoring.
Why:   Orchestrators need a cheap check that fails until the store is loaded.
How:   Reports whether the resource store has been loaded, how many resources
       it holds, and how long the process has been up.

Status levels:
    - healthy:   store loaded (HTTP 200)
    - unhealthy: store missing, startup has not completed (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from app import __version__
from app.schemas.resource import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    store = getattr(request.app.state, "store", None)

    if store is None:
        logger.warning("Health check: resource store not loaded")
        response.status_code = 503
        status, count = "unhealthy", 0
    else:
        status, count = "healthy", store.count

    return HealthResponse(
        status=status,
        version=__version__,
        resources=count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
