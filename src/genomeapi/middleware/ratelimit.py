"""Per-client request rate limiting for the HTTP transports."""

from __future__ import annotations

import math
import time
from collections import deque

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..constants import DEFAULT_RATE_LIMIT_MAX_REQUESTS, DEFAULT_RATE_LIMIT_WINDOW_SECONDS


class SlidingWindow:
    """Counts hits per key over the trailing ``window_seconds``.

    Args:
        max_requests: Hits allowed per key inside one window.
        window_seconds: Window length in seconds.
    """

    def __init__(self, max_requests: int, window_seconds: float):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: dict[str, deque[float]] = {}

    def hit(self, key: str, now: float) -> float | None:
        """Record a hit for ``key``.

        Returns:
            None when the hit is allowed, otherwise the seconds until the
            oldest hit in the window expires.
        """
        hits = self._hits.get(key)
        if hits is None:
            hits = self._hits[key] = deque()

        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()

        if len(hits) >= self.max_requests:
            return hits[0] + self.window_seconds - now

        hits.append(now)
        return None

    def prune(self, now: float) -> None:
        """Forget keys with no hits left in the window."""
        cutoff = now - self.window_seconds
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects clients exceeding the request budget with HTTP 429.

    Clients are keyed by the first ``X-Forwarded-For`` hop when present,
    else by the socket peer address.
    """

    def __init__(
        self,
        app,  # noqa: ANN001
        max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
    ):
        super().__init__(app)
        self.window = SlidingWindow(max_requests, window_seconds)

    @staticmethod
    def client_key(request: Request) -> str:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001, ANN201
        now = time.monotonic()
        self.window.prune(now)

        retry_after = self.window.hit(self.client_key(request), now)
        if retry_after is not None:
            return JSONResponse(
                {"error": "Rate limit exceeded"},
                status_code=429,
                headers={"Retry-After": str(max(math.ceil(retry_after), 1))},
            )
        return await call_next(request)
