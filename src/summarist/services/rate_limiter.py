"""In-process fixed-window rate limiter keyed by client address."""

import logging
import math
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """Admit at most ``max_requests`` per key within each fixed window.

    The window for a key opens at its first admission and closes exactly
    ``window_seconds`` later; the next request after that starts a new window
    with the counter at 1. State is process-local and lost on restart.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._next_sweep = clock() + window_seconds
        self._lock = threading.Lock()

    def tracked_keys(self) -> int:
        """Number of keys with a tracked window."""
        with self._lock:
            return len(self._windows)

    def _sweep(self, now: float) -> None:
        # Caller holds the lock. Runs at most once per window length.
        if now < self._next_sweep:
            return
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]
        self._next_sweep = now + self.window_seconds
        if expired:
            logger.debug(f"Evicted {len(expired)} expired rate limit windows")

    def admit(self, key: str) -> bool:
        """Record a request for ``key`` and return whether it may proceed."""
        now = self._clock()
        with self._lock:
            self._sweep(now)
            window = self._windows.get(key)
            if window is None or now > window.reset_at:
                self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
                return True
            if window.count < self.max_requests:
                window.count += 1
                return True
            return False

    def retry_after(self, key: str) -> int:
        """Seconds until ``key``'s current window resets (0 if none is open)."""
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now > window.reset_at:
                return 0
            return max(1, math.ceil(window.reset_at - now))

    def reset(self) -> None:
        """Forget all windows."""
        with self._lock:
            self._windows.clear()
            self._next_sweep = self._clock() + self.window_seconds


def client_key(headers: Mapping[str, str]) -> str:
    """Derive the rate-limit key from proxy address headers.

    Uses the first entry of ``X-Forwarded-For``, then ``X-Real-IP``. Callers
    with neither header share the ``unknown`` bucket.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    logger.debug("No client address headers; using shared unknown bucket")
    return UNKNOWN_CLIENT
