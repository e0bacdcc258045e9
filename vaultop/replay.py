"""Idempotency protection: detects duplicate request IDs within a window.

::

    detector = ReplayDetector(300.0)
    detector.check(request_id)  # raises ReplayError if already processed

IDs are evicted once their window has elapsed, so memory grows with the
request rate rather than the total number of requests.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class ReplayError(Exception):
    """Raised when an operation ID has already been processed."""

    def __init__(self, op_id: str) -> None:
        super().__init__("replay: duplicate operation ID")
        self.op_id = op_id


class ReplayDetector:
    """Remembers operation IDs for ``window`` seconds to reject replays."""

    def __init__(self, window: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.window = window
        self._clock = clock
        self._seen: dict[str, float] = {}
        self._lock = threading.Lock()

    def _evict(self, now: float) -> None:
        self._seen = {
            op_id: expires_at
            for op_id, expires_at in self._seen.items()
            if expires_at > now
        }

    def check(self, op_id: str) -> None:
        """Record ``op_id``; raise ReplayError if it is already tracked."""
        with self._lock:
            now = self._clock()
            self._evict(now)
            if op_id in self._seen:
                raise ReplayError(op_id)
            self._seen[op_id] = now + self.window

    def seen(self, op_id: str) -> bool:
        """Return True if ``op_id`` is tracked and not yet expired."""
        with self._lock:
            expires_at = self._seen.get(op_id)
            return expires_at is not None and expires_at > self._clock()

    def size(self) -> int:
        """Return the number of tracked, unexpired IDs."""
        with self._lock:
            self._evict(self._clock())
            return len(self._seen)