"""
Portfolio Backend: Request Logging Middleware
==============================================

What:  One access log line per HTTP request, with status and duration.
Why:   Shows at a glance how many contact posts arrived and how they ended,
       without logging request bodies (names, addresses and messages are
       personal data and stay out of the access log).
How:   Times the downstream call and logs method, path, status, duration,
       request ID and client IP on the `portfolio.access` logger.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Probe endpoints (/health, /auth/status) are not logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portfolio_api.middleware.request_id import request_id_var

logger = logging.getLogger("portfolio.access")

PROBE_PATHS = {"/health", "/auth/status"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs structured information about each HTTP request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in PROBE_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
