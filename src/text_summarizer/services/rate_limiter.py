"""Fixed-window rate limiter shared by every in-flight request.

A single global bucket: ``permits`` admissions per ``window_seconds``.
Admission is fail-fast: an exhausted window raises immediately instead of
queueing the caller.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from text_summarizer.domain.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RateLimiterSnapshot:
    """Point-in-time view of the limiter, for health reporting."""

    permits: int
    window_seconds: float
    available_permits: int
    seconds_until_reset: float


class RateLimiter:
    """Lock-protected fixed-window counter.

    Parameters
    ----------
    permits:
        Admissions allowed per window.
    window_seconds:
        Window length; the counter resets on the first call after rollover.
    clock:
        Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        permits: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if permits < 1:
            raise ValueError("permits must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self._permits = permits
        self._window = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._window_start = clock()
        self._used = 0

    @property
    def permits(self) -> int:
        return self._permits

    @property
    def window_seconds(self) -> float:
        return self._window

    def try_acquire(self) -> bool:
        """Take one permit if available; never blocks on the window."""
        with self._lock:
            self._roll_window()
            if self._used >= self._permits:
                return False
            self._used += 1
            return True

    def admit(self) -> None:
        """Admit one request or raise :class:`RateLimitExceededError`."""
        if not self.try_acquire():
            logger.warning("rate_limit exceeded limiter=summarizeApi")
            raise RateLimitExceededError(
                f"Rate limit exceeded. Maximum {self._permits} requests per "
                f"{self._window:g} seconds allowed. Please try again later."
            )
        logger.debug("Request within rate limit")

    def snapshot(self) -> RateLimiterSnapshot:
        with self._lock:
            self._roll_window()
            remaining = self._window - (self._clock() - self._window_start)
            return RateLimiterSnapshot(
                permits=self._permits,
                window_seconds=self._window,
                available_permits=self._permits - self._used,
                seconds_until_reset=max(remaining, 0.0),
            )

    def _roll_window(self) -> None:
        # Caller holds the lock.
        now = self._clock()
        elapsed = now - self._window_start
        if elapsed >= self._window:
            # Align to the window grid so a quiet period does not shift it.
            self._window_start += (elapsed // self._window) * self._window
            self._used = 0
