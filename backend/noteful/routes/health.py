"""
Noteful Backend — Health Check Route
=====================================

What:  GET /health for container health checks and load balancer probes.
How:   Runs `SELECT 1` through the Database; the service is only healthy
       when it can reach its store.

    Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Response

from noteful import __version__
from noteful.database import Database
from noteful.schemas.common import HealthResponse

logger = logging.getLogger(__name__)


def create_health_router(database: Database) -> APIRouter:
    router = APIRouter(tags=["Health"])

    # Uptime is measured from router construction, i.e. app creation
    start_time = time.time()

    @router.get(
        "/health",
        response_model=HealthResponse,
        responses={503: {"description": "Database unreachable", "model": HealthResponse}},
        summary="Service health check",
    )
    async def health_check(response: Response) -> HealthResponse:
        connected = await database.ping()
        if not connected:
            response.status_code = 503
            logger.warning("Health check: database unreachable")

        return HealthResponse(
            status="healthy" if connected else "unhealthy",
            version=__version__,
            database="connected" if connected else "disconnected",
            uptime_seconds=round(time.time() - start_time, 2),
        )

    return router
