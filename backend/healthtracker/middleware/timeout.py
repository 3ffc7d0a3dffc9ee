"""
HealthTracker — Request Timeout Middleware
============================================

What:  Bounds how long any single request may run.
How:   Plain ASGI middleware: the downstream app (routing, handler,
       exception handlers) runs under asyncio.wait_for(). On expiry it is
       cancelled and, if no response has started yet, the client gets 504
       with the standard error envelope.

Caveat:
    A cancelled POST may already have committed. The 504 message says so,
    and clients are expected to re-query rather than resend blindly.
"""

import asyncio
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from healthtracker.exceptions import RequestTimeoutError
from healthtracker.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class TimeoutMiddleware:
    """
    Args:
        timeout: Seconds allowed per request (Settings.request_timeout)
    """

    def __init__(self, app: ASGIApp, timeout: float = 10.0):
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_tracking), timeout=self.timeout)
        except asyncio.TimeoutError:
            rid = request_id_var.get("")
            logger.error(
                "[%s] %s %s exceeded %.2fs",
                rid,
                scope.get("method", ""),
                scope.get("path", ""),
                self.timeout,
            )
            if response_started:
                # Headers already went out; the client sees a truncated body
                return

            exc = RequestTimeoutError(timeout=self.timeout)
            response = JSONResponse(
                status_code=504,
                content={
                    "error": "request_timeout",
                    "message": exc.message,
                    "details": {"timeout": self.timeout},
                    "request_id": rid,
                },
            )
            await response(scope, receive, send)
