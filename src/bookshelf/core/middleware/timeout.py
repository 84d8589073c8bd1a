"""
Per-request deadline.

The downstream app runs under `asyncio.wait_for`; when the deadline passes the handler
task is cancelled, which also cancels whatever storage call it is awaiting. If no
response bytes were sent yet the client gets 504, otherwise the connection is simply
cut short.

Written as plain ASGI middleware (not BaseHTTPMiddleware) so it can see whether the
response has started.
"""
import asyncio
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timeout"


class TimeoutMiddleware:
    def __init__(self, app: ASGIApp, timeout: float = 10.0) -> None:
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "http.request_timeout",
                extra={"path": scope.get("path"), "timeout_seconds": self.timeout},
            )
            if response_started:
                return
            response = JSONResponse(
                status_code=504,
                content={"status": "error", "message": TIMEOUT_MESSAGE},
            )
            await response(scope, receive, send)
