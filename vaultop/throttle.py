"""Per-key token-bucket throttling of secret operations.

Each key has its own bucket. Tokens accumulate at ``rate`` per second up
to ``burst``; when a bucket is empty ``allow`` raises ThrottledError.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass


class ThrottledError(Exception):
    """Raised when a caller has used up its allowed burst."""

    def __init__(self, key: str) -> None:
        super().__init__("throttle: request denied — rate limit exceeded")
        self.key = key


@dataclass(frozen=True)
class ThrottleConfig:
    """Token-bucket parameters: tokens per second and maximum bucket size."""

    rate: float = 5.0
    burst: int = 10


def default_config() -> ThrottleConfig:
    """Return the default throttle configuration."""
    return ThrottleConfig(rate=5.0, burst=10)


@dataclass
class _Bucket:
    tokens: float
    last_seen: float


class Throttler:
    """Enforces per-key token-bucket rate limiting."""

    def __init__(
        self,
        config: ThrottleConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config if config is not None else default_config()
        self._clock = clock
        self._state: dict[str, _Bucket] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> None:
        """Take one token for ``key``; raise ThrottledError if none is left."""
        with self._lock:
            now = self._clock()
            burst = float(self.config.burst)
            bucket = self._state.setdefault(key, _Bucket(tokens=burst, last_seen=now))
            elapsed = now - bucket.last_seen
            bucket.tokens = min(bucket.tokens + elapsed * self.config.rate, burst)
            bucket.last_seen = now
            if bucket.tokens < 1:
                raise ThrottledError(key)
            bucket.tokens -= 1

    def remaining(self, key: str) -> float:
        """Return the token count of ``key`` as of its last request."""
        with self._lock:
            bucket = self._state.get(key)
            return float(self.config.burst) if bucket is None else bucket.tokens

    def reset(self, key: str) -> None:
        """Drop the bucket of ``key``, restoring a full burst."""
        with self._lock:
            self._state.pop(key, None)