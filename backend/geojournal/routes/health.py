"""
GeoJournal Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the database with SELECT 1 and reports whether the geocoder has
       credentials. The geocoder is not called: every call is billed.

Status levels:
    - healthy:   database reachable, geocoder configured (HTTP 200)
    - degraded:  database reachable, geocoder not configured (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from geojournal import __version__
from geojournal.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    overall = "healthy"

    database = getattr(request.app.state, "database", None)
    if database is not None and await database.ping():
        db_status = "connected"
    else:
        db_status = "disconnected"
        overall = "unhealthy"

    geocoder = getattr(request.app.state, "geocoder", None)
    if geocoder is not None and geocoder.is_configured():
        geocoder_status = "configured"
    else:
        geocoder_status = "not_configured"
        if overall != "unhealthy":
            overall = "degraded"

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        geocoder=geocoder_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
