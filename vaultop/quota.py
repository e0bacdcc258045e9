"""Per-key operation limits within a fixed rolling window.

Used to stop excessive secret reads, writes or rotations within a
configured period::

    limiter = QuotaLimiter(QuotaConfig(max_ops=10, window=60.0))
    limiter.allow(secret_key)  # raises QuotaExceededError when over quota
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass


class QuotaExceededError(Exception):
    """Raised when a key has used up its operations for the current window."""

    def __init__(self, key: str) -> None:
        super().__init__("quota exceeded")
        self.key = key


@dataclass(frozen=True)
class QuotaConfig:
    """Quota settings; ``window`` is in seconds."""

    max_ops: int
    window: float


@dataclass
class _Entry:
    count: int
    window_end: float


class QuotaLimiter:
    """Counts operations per key and refuses them once the quota is reached."""

    def __init__(
        self, config: QuotaConfig, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.config = config
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> None:
        """Record one operation for ``key``; raise QuotaExceededError if over quota."""
        with self._lock:
            now = self._clock()
            entry = self._entries.get(key)
            if entry is None or now > entry.window_end:
                self._entries[key] = _Entry(count=1, window_end=now + self.config.window)
                return
            if entry.count >= self.config.max_ops:
                raise QuotaExceededError(key)
            entry.count += 1

    def remaining(self, key: str) -> int:
        """Return how many operations ``key`` has left in its current window."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._clock() > entry.window_end:
                return self.config.max_ops
            return self.config.max_ops - entry.count

    def reset(self, key: str) -> None:
        """Forget the quota state of ``key``."""
        with self._lock:
            self._entries.pop(key, None)