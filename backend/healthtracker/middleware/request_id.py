"""
HealthTracker — Request ID Middleware
=======================================

What:  Tags each request with a short correlation ID.
How:   Reuses the client's X-Request-ID header when it is a plausible ID,
       otherwise generates one; stores it in a ContextVar for loggers and
       exception handlers and echoes it in the response header.

The ID ends up in every access line and in the `request_id` field of error
bodies, so a CLI user reporting "API returned 503" can be matched to the
server log. Client-supplied IDs are limited to 64 characters of
[A-Za-z0-9._-]; anything else is replaced, since the value is written
verbatim into log lines.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(header_value: str) -> str:
    """Return the client's ID if well-formed, else a fresh 8-char hex ID."""
    if header_value and _CLIENT_ID.fullmatch(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns request_id_var and request.state.request_id for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID", ""))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
