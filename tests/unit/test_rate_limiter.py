"""Tests for FixedWindowRateLimiter and client key derivation."""

import threading

from summarist.services.rate_limiter import UNKNOWN_CLIENT, FixedWindowRateLimiter, client_key

WINDOW = 15 * 60


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _limiter(clock: FakeClock, max_requests: int = 10) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(max_requests=max_requests, window_seconds=WINDOW, clock=clock)


class TestAdmit:
    """Tests for fixed-window admission."""

    def test_first_ten_admitted_eleventh_rejected(self):
        limiter = _limiter(FakeClock())
        results = [limiter.admit("1.2.3.4") for _ in range(11)]
        assert results == [True] * 10 + [False]

    def test_rejections_continue_inside_window(self):
        clock = FakeClock()
        limiter = _limiter(clock)
        for _ in range(10):
            limiter.admit("a")
        clock.advance(WINDOW - 1)
        assert limiter.admit("a") is False

    def test_window_still_closed_exactly_at_reset_time(self):
        """Reset happens once the reset time has passed."""
        clock = FakeClock()
        limiter = _limiter(clock)
        for _ in range(10):
            limiter.admit("a")
        clock.advance(WINDOW)
        assert limiter.admit("a") is False

    def test_window_resets_after_reset_time(self):
        clock = FakeClock()
        limiter = _limiter(clock)
        for _ in range(10):
            limiter.admit("a")
        clock.advance(WINDOW + 0.001)

        assert limiter.admit("a") is True
        # Counter restarted at 1: nine more fit in the new window
        assert [limiter.admit("a") for _ in range(10)] == [True] * 9 + [False]

    def test_window_anchored_at_first_admission(self):
        clock = FakeClock()
        limiter = _limiter(clock, max_requests=2)
        limiter.admit("a")
        clock.advance(WINDOW - 10)
        assert limiter.admit("a") is True
        clock.advance(11)  # past first + window
        assert limiter.admit("a") is True

    def test_keys_are_independent(self):
        limiter = _limiter(FakeClock(), max_requests=1)
        assert limiter.admit("a") is True
        assert limiter.admit("b") is True
        assert limiter.admit("a") is False
        assert limiter.admit("b") is False

    def test_reset_clears_state(self):
        limiter = _limiter(FakeClock(), max_requests=1)
        limiter.admit("a")
        limiter.reset()
        assert limiter.admit("a") is True

    def test_concurrent_admissions_do_not_lose_increments(self):
        limiter = FixedWindowRateLimiter(max_requests=50, window_seconds=WINDOW)
        admitted = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(20):
                ok = limiter.admit("shared")
                with lock:
                    admitted.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert admitted.count(True) == 50
        assert admitted.count(False) == 150


class TestEviction:
    """Expired windows are dropped so the key map stays bounded."""

    def test_expired_windows_evicted(self):
        clock = FakeClock()
        limiter = _limiter(clock)
        for i in range(10_000):
            limiter.admit(f"10.0.{i // 256}.{i % 256}")
        assert limiter.tracked_keys() == 10_000

        clock.advance(10 * WINDOW)
        limiter.admit("198.51.100.1")

        assert limiter.tracked_keys() == 1

    def test_open_windows_survive_sweep(self):
        clock = FakeClock()
        limiter = _limiter(clock, max_requests=1)
        limiter.admit("old")
        clock.advance(WINDOW / 2)
        limiter.admit("recent")
        clock.advance(WINDOW / 2 + 1)

        limiter.admit("new")

        assert limiter.tracked_keys() == 2
        assert limiter.admit("recent") is False

    def test_sweep_does_not_reset_open_window_counts(self):
        clock = FakeClock()
        limiter = _limiter(clock, max_requests=2)
        limiter.admit("a")
        limiter.admit("a")
        clock.advance(WINDOW)
        assert limiter.admit("a") is False


class TestRetryAfter:
    """Tests for retry_after."""

    def test_no_window_returns_zero(self):
        assert _limiter(FakeClock()).retry_after("nobody") == 0

    def test_counts_down_to_reset(self):
        clock = FakeClock()
        limiter = _limiter(clock)
        limiter.admit("a")
        clock.advance(60)
        assert limiter.retry_after("a") == WINDOW - 60

    def test_expired_window_returns_zero(self):
        clock = FakeClock()
        limiter = _limiter(clock)
        limiter.admit("a")
        clock.advance(WINDOW + 1)
        assert limiter.retry_after("a") == 0


class TestClientKey:
    """Tests for client_key header handling."""

    def test_first_forwarded_address(self):
        headers = {"x-forwarded-for": "203.0.113.5, 10.0.0.1", "x-real-ip": "10.0.0.9"}
        assert client_key(headers) == "203.0.113.5"

    def test_real_ip_fallback(self):
        assert client_key({"x-real-ip": "198.51.100.7"}) == "198.51.100.7"

    def test_no_headers_uses_unknown_bucket(self):
        assert client_key({}) == UNKNOWN_CLIENT == "unknown"

    def test_blank_forwarded_falls_back(self):
        assert client_key({"x-forwarded-for": " ", "x-real-ip": "198.51.100.7"}) == "198.51.100.7"
