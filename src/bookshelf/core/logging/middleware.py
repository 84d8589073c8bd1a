"""
Request-scoped logging middleware.

RequestIDMiddleware
    Reuses an incoming `X-Request-ID` header or generates a UUID4, stores it in the
    contextvar read by RequestIdFilter, and echoes it on the response.

AccessLogMiddleware
    Writes one `http.request` record per request with method, path, status, duration
    and client address. Installed inside RequestIDMiddleware so the record carries
    the request id.
"""

import time
import uuid
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_REQUEST_ID_LENGTH = 128

logger = logging.getLogger("bookshelf.access")


def _incoming_request_id(request: Request) -> str | None:
    rid = request.headers.get(REQUEST_ID_HEADER)
    # reject ids that could forge log lines or bloat records
    if not rid or len(rid) > _MAX_REQUEST_ID_LENGTH or not rid.isprintable():
        return None
    return rid


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = _incoming_request_id(request) or str(uuid.uuid4())
        token = set_request_id(rid)

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        logger.info(
            "http.request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "client": request.client.host if request.client else None,
            },
        )
        return response
