"""
HealthTracker — Access Log Middleware
=======================================

What:  One log line per HTTP request on the "healthtracker.access" logger.

Line format:
    POST /weight 201 4.2ms [3f2a9c1e] from 127.0.0.1

    Level follows the status: 5xx → ERROR, 4xx → WARNING, else INFO.
    Request bodies are never logged (they hold personal health data).
    GET /health is skipped: uptime monitors and container health checks poll it
    every few seconds, which would bury the weigh-in and run traffic. An
    unhealthy store still shows up through HealthService's warnings.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from healthtracker.middleware.request_id import request_id_var

logger = logging.getLogger("healthtracker.access")

QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
