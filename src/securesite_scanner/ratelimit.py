"""In-memory fixed-window rate limiting for the HTTP service."""

import time
from typing import Callable, NamedTuple

from fastapi import Request

MAX_REQUESTS = 10
WINDOW_SECONDS = 60.0

# Expired windows are swept once the table grows past this many clients
SWEEP_THRESHOLD = 10_000


class RateLimitDecision(NamedTuple):
    allowed: bool
    remaining: int
    retry_after: int


class FixedWindowRateLimiter:
    """Counts requests per client key within fixed windows.

    A window opens with a client's first request and lasts window_seconds;
    up to max_requests are allowed inside it. State is per process.
    """

    def __init__(
        self,
        max_requests: int = MAX_REQUESTS,
        window_seconds: float = WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # key -> (requests in window, window end)
        self._windows: dict[str, tuple[int, float]] = {}

    def hit(self, key: str) -> RateLimitDecision:
        """Record one request for key and decide whether it is allowed."""
        now = self._clock()
        if len(self._windows) > SWEEP_THRESHOLD:
            self._sweep(now)

        count, window_end = self._windows.get(key, (0, 0.0))
        if window_end <= now:
            count, window_end = 0, now + self.window_seconds

        if count >= self.max_requests:
            return RateLimitDecision(False, 0, max(1, int(window_end - now + 0.999)))

        count += 1
        self._windows[key] = (count, window_end)
        return RateLimitDecision(True, self.max_requests - count, 0)

    def reset(self) -> None:
        self._windows.clear()

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, window_end) in self._windows.items() if window_end <= now]
        for key in expired:
            del self._windows[key]


def get_client_ip(request: Request) -> str:
    """Client address from X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"
