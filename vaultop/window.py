"""Sliding-window event counter keyed by name."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class SlidingWindowCounter:
    """Counts events per key that happened within the last ``window`` seconds."""

    def __init__(self, window: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.window = window
        self._clock = clock
        self._buckets: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def _fresh(self, key: str, now: float) -> list[float]:
        cutoff = now - self.window
        return [stamp for stamp in self._buckets.get(key, []) if stamp >= cutoff]

    def record(self, key: str) -> None:
        """Add one event for ``key`` at the current time."""
        with self._lock:
            now = self._clock()
            self._buckets[key] = [*self._fresh(key, now), now]

    def count(self, key: str) -> int:
        """Return the number of events for ``key`` within the window."""
        with self._lock:
            fresh = self._fresh(key, self._clock())
            self._buckets[key] = fresh
            return len(fresh)

    def reset(self, key: str) -> None:
        """Clear all events recorded for ``key``."""
        with self._lock:
            self._buckets.pop(key, None)