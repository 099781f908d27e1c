"""Unit tests for the fixed-window rate limiter."""

import threading

import pytest

from text_summarizer.domain.exceptions import ErrorCode, RateLimitExceededError
from text_summarizer.services.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestRateLimiter:

    def test_admits_up_to_permits_then_rejects(self):
        limiter = RateLimiter(permits=10, window_seconds=60, clock=FakeClock())
        for _ in range(10):
            limiter.admit()
        with pytest.raises(RateLimitExceededError) as exc_info:
            limiter.admit()
        assert exc_info.value.code is ErrorCode.RATE_LIMIT_EXCEEDED
        assert "Maximum 10 requests per 60 seconds" in str(exc_info.value)

    def test_window_rollover_restores_permits(self):
        clock = FakeClock()
        limiter = RateLimiter(permits=2, window_seconds=60, clock=clock)
        assert limiter.try_acquire()
        assert limiter.try_acquire()
        assert not limiter.try_acquire()

        clock.advance(59.9)
        assert not limiter.try_acquire()

        clock.advance(0.1)
        assert limiter.try_acquire()

    def test_window_stays_aligned_after_idle_period(self):
        clock = FakeClock()
        limiter = RateLimiter(permits=1, window_seconds=10, clock=clock)
        clock.advance(35)
        assert limiter.try_acquire()
        assert limiter.snapshot().seconds_until_reset == pytest.approx(5.0)

    def test_snapshot_reports_available_permits(self):
        limiter = RateLimiter(permits=3, window_seconds=60, clock=FakeClock())
        limiter.admit()
        snap = limiter.snapshot()
        assert snap.permits == 3
        assert snap.available_permits == 2
        assert snap.window_seconds == 60

    def test_concurrent_admissions_never_exceed_permits(self):
        limiter = RateLimiter(permits=10, window_seconds=60)
        results: list[bool] = []
        lock = threading.Lock()

        def worker():
            for _ in range(20):
                ok = limiter.try_acquire()
                with lock:
                    results.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 10
        assert len(results) == 160

    @pytest.mark.parametrize(("permits", "window"), [(0, 60), (5, 0)])
    def test_rejects_invalid_configuration(self, permits, window):
        with pytest.raises(ValueError):
            RateLimiter(permits=permits, window_seconds=window)
