"""
Portfolio Backend: Health Check Route
======================================

What:  Health check endpoint for container and load balancer probes.
Why:   The contact form is only useful if submissions can be stored, so the
       service is healthy only while the database answers.
How:   Runs SELECT 1 on the engine and reports version and uptime.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)

The email provider is not probed: a SendGrid outage loses notifications,
not submissions, so it must not take the service out of rotation.
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from portfolio_api import __version__
from portfolio_api import database
from portfolio_api.schemas.submission import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
