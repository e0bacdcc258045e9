"""Retry with exponential backoff for calls to remote secret providers."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


class MaxAttemptsReachedError(Exception):
    """Raised when every retry attempt has failed."""

    def __init__(self, last_error: BaseException) -> None:
        super().__init__(f"retry: max attempts reached: {last_error}")
        self.last_error = last_error


@dataclass(frozen=True)
class RetryConfig:
    """Retry parameters; ``delay`` is in seconds, ``multiplier`` 1.0 keeps it constant."""

    max_attempts: int = 3
    delay: float = 0.2
    multiplier: float = 2.0


def default_config() -> RetryConfig:
    """Return the default retry configuration."""
    return RetryConfig(max_attempts=3, delay=0.2, multiplier=2.0)


def call_with_retry(cfg: RetryConfig, fn: Callable[[], T]) -> T:
    """Call ``fn`` until it succeeds or attempts run out, and return its result.

    Raises MaxAttemptsReachedError, chained to the last failure, when all
    attempts fail.
    """
    attempts = max(cfg.max_attempts, 1)
    delay = cfg.delay
    last: Exception | None = None
    for attempt in range(attempts):
        try:
            return fn()
        except Exception as exc:
            last = exc
        if attempt < attempts - 1:
            time.sleep(delay)
            if cfg.multiplier > 0:
                delay *= cfg.multiplier
    assert last is not None
    raise MaxAttemptsReachedError(last) from last