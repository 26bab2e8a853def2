"""
Fixed-window rate limiting for public form and vendor-backed endpoints.

Each key holds (count, reset_at). The first hit, or any hit after reset_at,
opens a new window with count=1. Inside a window a hit is rejected once
count >= limit. Windows are not sliding: a client straddling a window edge
can land up to 2× limit requests in a short burst.

Counters are process-local (cachetools TTLCache, entries evicted one window
after they were opened) and are NOT shared across instances.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from cachetools import TTLCache

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        name: str = "default",
        maxsize: int = 10_000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self.name = name
        self._timer = timer
        # The TTL only bounds memory; window logic below uses reset_at.
        self._windows: TTLCache = TTLCache(
            maxsize=maxsize, ttl=window_seconds * 2, timer=timer
        )

    def hit(self, key: str) -> bool:
        """Record one request for `key`. Returns False when it must be rejected."""
        now = self._timer()
        window: _Window | None = self._windows.get(key)

        if window is None or now > window.reset_at:
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return True

        if window.count >= self.limit:
            logger.info("Rate limit '%s' exceeded for key=%s", self.name, key)
            return False

        window.count += 1
        return True

    def remaining(self, key: str) -> int:
        window: _Window | None = self._windows.get(key)
        if window is None or self._timer() > window.reset_at:
            return self.limit
        return max(0, self.limit - window.count)

    def reset(self) -> None:
        self._windows.clear()


# ── Limiter instances ────────────────────────────────────────────────────────

HOUR = 60 * 60
DAY = 24 * HOUR

weather_limiter = FixedWindowRateLimiter(limit=60, window_seconds=HOUR, name="weather")
question_limiter = FixedWindowRateLimiter(limit=5, window_seconds=HOUR, name="questions")
community_suggestion_limiter = FixedWindowRateLimiter(
    limit=3, window_seconds=DAY, name="community-suggestions"
)
