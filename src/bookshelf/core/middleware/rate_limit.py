"""
In-memory sliding-window rate limiting per client IP.

Each client key keeps a deque of request timestamps inside the window. A request that
would exceed `requests` hits within `window_seconds` is answered with 429 and a
Retry-After header. State is per process; run one limiter per worker.
"""
import asyncio
import logging
import math
import time
from collections import defaultdict, deque

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = "Too many requests"


def client_ip(request: Request) -> str:
    """
    Client address as seen behind a proxy: first X-Forwarded-For hop, then X-Real-IP,
    then the socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "anonymous"


class SlidingWindowLimiter:
    """Simple in-memory limiter keyed by an arbitrary string."""

    def __init__(self, requests: int, window_seconds: float) -> None:
        self._hits: defaultdict[str, deque[float]] = defaultdict(deque)
        self._lock = asyncio.Lock()
        self._requests = requests
        self._window = window_seconds
        self._last_cleanup = time.monotonic()
        self._cleanup_interval = 60.0  # seconds

    def _cleanup_old_keys(self, now: float) -> None:
        """Drop keys whose deques have emptied, so idle clients don't accumulate."""
        if now - self._last_cleanup < self._cleanup_interval:
            return
        self._last_cleanup = now

        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= now - self._window]:
            del self._hits[key]

    async def hit(self, key: str) -> float | None:
        """
        Record a request for `key`.

        Returns:
            None when allowed, otherwise the number of seconds until a slot frees up.
        """
        now = time.monotonic()
        window_start = now - self._window
        async with self._lock:
            self._cleanup_old_keys(now)
            hits = self._hits[key]
            while hits and hits[0] <= window_start:
                hits.popleft()
            if len(hits) >= self._requests:
                return max(0.0, self._window - (now - hits[0]))
            hits.append(now)
            return None

    async def reset(self) -> None:
        async with self._lock:
            self._hits.clear()


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, requests: int = 100, window_seconds: float = 60) -> None:
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(requests, window_seconds)

    async def dispatch(self, request: Request, call_next):
        key = client_ip(request)
        retry_after = await self.limiter.hit(key)

        if retry_after is not None:
            logger.info("http.rate_limited", extra={"client": key, "path": request.url.path})
            return JSONResponse(
                status_code=429,
                content={"status": "error", "message": RATE_LIMITED_MESSAGE},
                headers={"Retry-After": str(max(1, math.ceil(retry_after)))},
            )

        return await call_next(request)
