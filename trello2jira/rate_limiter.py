"""Token bucket pacing for Trello API requests."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any


class RateLimiter:
    """Token bucket that spaces out API requests

    Each request consumes one token; tokens refill at ``requests_per_second``
    up to ``burst_allowance``. When the bucket is empty, ``wait()`` sleeps
    just long enough for the next token. Requests are never rejected or
    retried, only delayed.
    """

    def __init__(
        self,
        requests_per_second: float,
        burst_allowance: int = 5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        if burst_allowance < 1:
            raise ValueError("burst_allowance must be at least 1")

        self.rate = requests_per_second
        self.burst_allowance = burst_allowance
        self.tokens = float(burst_allowance)
        self._clock = clock
        self._sleep = sleep
        self.last_update = clock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self.last_update
        self.tokens = min(float(self.burst_allowance), self.tokens + elapsed * self.rate)
        self.last_update = now

    def wait(self) -> float:
        """Block until a token is available, then consume it.

        Returns:
            Seconds spent sleeping (0.0 when a token was immediately available)
        """
        self._refill()

        slept = 0.0
        if self.tokens < 1.0:
            slept = (1.0 - self.tokens) / self.rate
            self._sleep(slept)
            self._refill()
            # Sleep granularity may leave us a hair short of a full token
            self.tokens = max(self.tokens, 1.0)

        self.tokens -= 1.0
        return slept

    def get_status(self) -> dict[str, Any]:
        """Get current rate limiter status for debugging"""
        return {
            "available_tokens": self.tokens,
            "max_tokens": self.burst_allowance,
            "rate_per_second": self.rate,
        }
