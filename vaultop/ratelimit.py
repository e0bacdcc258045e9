"""Per-key call limits over a rolling window of call timestamps."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class RateLimitedError(Exception):
    """Raised when the rate limit for a key is exceeded."""

    def __init__(self, key: str) -> None:
        super().__init__("rate limit exceeded")
        self.key = key


class RateLimiter:
    """Allows at most ``max_calls`` per ``window`` seconds for each key."""

    def __init__(
        self,
        max_calls: int,
        window: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_calls = max_calls
        self.window = window
        self._clock = clock
        self._buckets: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def _recent(self, key: str, now: float) -> list[float]:
        cutoff = now - self.window
        return [stamp for stamp in self._buckets.get(key, []) if stamp > cutoff]

    def allow(self, key: str) -> None:
        """Record a call for ``key``; raise RateLimitedError if over the limit."""
        with self._lock:
            now = self._clock()
            recent = self._recent(key, now)
            if len(recent) >= self.max_calls:
                self._buckets[key] = recent
                raise RateLimitedError(key)
            recent.append(now)
            self._buckets[key] = recent

    def reset(self, key: str) -> None:
        """Forget the call history of ``key``."""
        with self._lock:
            self._buckets.pop(key, None)

    def remaining(self, key: str) -> int:
        """Return how many calls ``key`` may still make within the window."""
        with self._lock:
            count = len(self._recent(key, self._clock()))
            return max(self.max_calls - count, 0)