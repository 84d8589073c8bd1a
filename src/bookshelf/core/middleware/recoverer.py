"""
Last line of defence for unhandled exceptions.

Anything that escapes the route handlers and the registered exception handlers (driver
errors, bugs) is logged with its stack trace and answered with the generic 500 envelope.
The client never sees the exception text.
"""
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from bookshelf.exceptions.base import ApplicationError

logger = logging.getLogger(__name__)


class RecovererMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "http.unhandled_exception",
                extra={"method": request.method, "path": request.url.path},
            )
            error = ApplicationError()
            return JSONResponse(status_code=error.http_status(), content=error.to_payload())
