from .recoverer import RecovererMiddleware
from .rate_limit import RateLimitMiddleware, SlidingWindowLimiter, client_ip
from .throttle import ThrottleMiddleware
from .paths import GetHeadMiddleware, StripSlashesMiddleware
from .timeout import TimeoutMiddleware

__all__ = [
    "RecovererMiddleware",
    "RateLimitMiddleware",
    "SlidingWindowLimiter",
    "client_ip",
    "ThrottleMiddleware",
    "GetHeadMiddleware",
    "StripSlashesMiddleware",
    "TimeoutMiddleware",
]
