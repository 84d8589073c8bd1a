"""
Global cap on in-flight requests.

Unlike the per-IP rate limit this counts requests currently being served across all
clients. Once `limit` are in flight, new requests are answered 429 right away instead of
queueing behind the slow ones.
"""
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

CAPACITY_EXCEEDED_MESSAGE = "Server capacity exceeded"


class ThrottleMiddleware:
    def __init__(self, app: ASGIApp, limit: int = 100) -> None:
        self.app = app
        self.limit = limit
        self.in_flight = 0

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # single event loop: check and increment happen without an await in between
        if self.in_flight >= self.limit:
            logger.warning("http.capacity_exceeded", extra={"path": scope.get("path"), "limit": self.limit})
            response = JSONResponse(
                status_code=429,
                content={"status": "error", "message": CAPACITY_EXCEEDED_MESSAGE},
            )
            await response(scope, receive, send)
            return

        self.in_flight += 1
        try:
            await self.app(scope, receive, send)
        finally:
            self.in_flight -= 1
