"""
Per-caller rate limiting for API routes.
Counters live in an explicitly constructed limiter injected into the middleware.
"""
import math
import time
from dataclasses import dataclass

from fastapi import Request, status
from fastapi.responses import JSONResponse
from limits import RateLimitItemPerMinute
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from starlette.middleware.base import BaseHTTPMiddleware

from config import Config
from utils.constants import RATE_LIMIT_BODY
from utils.logger import app_logger


@dataclass
class RateLimitResult:
    """
    Outcome of counting one request against a caller's window.

    `reset_after` is the number of seconds until the oldest counted request leaves the window.
    """
    allowed: bool
    limit: int
    remaining: int
    reset_after: int


class RateLimiter:
    """
    Moving-window request counter keyed by caller address.

    Increments are atomic: the in-memory storage serialises updates with a lock.
    """

    def __init__(self, max_requests: int = Config.RATE_LIMIT_MAX_REQUESTS,
                 window_minutes: int = Config.RATE_LIMIT_WINDOW_MINUTES):
        self._item = RateLimitItemPerMinute(max_requests, window_minutes)
        self._storage = MemoryStorage()
        self._strategy = MovingWindowRateLimiter(self._storage)

    @property
    def limit(self) -> int:
        return self._item.amount

    def hit(self, key: str) -> RateLimitResult:
        """
        Count one request for the caller key.

        Args:
            key: Caller identity (client address)

        Returns:
            RateLimitResult describing whether the request is allowed
        """
        allowed = self._strategy.hit(self._item, key)
        stats = self._strategy.get_window_stats(self._item, key)
        reset_after = max(0, math.ceil(stats.reset_time - time.time()))

        return RateLimitResult(
            allowed=allowed,
            limit=self._item.amount,
            remaining=max(0, stats.remaining),
            reset_after=reset_after
        )

    def reset(self) -> None:
        """Drop all counters."""
        self._storage.reset()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects callers exceeding the rate limit on paths under a prefix.
    """

    def __init__(self, app, limiter: RateLimiter, path_prefix: str = Config.RATE_LIMIT_PATH_PREFIX):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        """
        Count the request and either reject it or pass it on.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from next handler or 429 response
        """
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        result = self.limiter.hit(client_ip)
        headers = {
            "RateLimit-Limit": str(result.limit),
            "RateLimit-Remaining": str(result.remaining),
            "RateLimit-Reset": str(result.reset_after),
        }

        if not result.allowed:
            app_logger.warning(f"Rate limit exceeded for IP: {client_ip}", extra={"ip": client_ip})
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=RATE_LIMIT_BODY,
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
