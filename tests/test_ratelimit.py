import pytest

from vaultop.ratelimit import RateLimitedError, RateLimiter


class FakeClock:
    def __init__(self, now: float = 5000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allow_within_limit():
    limiter = RateLimiter(3, 60.0)
    for _ in range(3):
        limiter.allow("key1")
    assert limiter.remaining("key1") == 0


def test_allow_exceeds_limit():
    limiter = RateLimiter(2, 60.0)
    limiter.allow("key1")
    limiter.allow("key1")
    with pytest.raises(RateLimitedError):
        limiter.allow("key1")


def test_allow_window_expiry():
    clock = FakeClock()
    limiter = RateLimiter(1, 60.0, clock=clock)
    limiter.allow("key1")
    clock.now += 61.0
    limiter.allow("key1")
    assert limiter.remaining("key1") == 0


def test_call_exactly_window_old_is_dropped():
    clock = FakeClock()
    limiter = RateLimiter(1, 60.0, clock=clock)
    limiter.allow("key1")
    clock.now += 60.0
    assert limiter.remaining("key1") == 1


def test_allow_independent_keys():
    limiter = RateLimiter(1, 60.0)
    limiter.allow("a")
    limiter.allow("b")
    assert limiter.remaining("a") == 0
    assert limiter.remaining("b") == 0


def test_reset_clears_history():
    limiter = RateLimiter(1, 60.0)
    limiter.allow("key1")
    limiter.reset("key1")
    limiter.allow("key1")
    assert limiter.remaining("key1") == 0


def test_remaining_decreases_on_allow():
    limiter = RateLimiter(3, 60.0)
    assert limiter.remaining("k") == 3
    limiter.allow("k")
    assert limiter.remaining("k") == 2


def test_remaining_never_negative():
    limiter = RateLimiter(1, 60.0)
    limiter.allow("k")
    with pytest.raises(RateLimitedError):
        limiter.allow("k")
    assert limiter.remaining("k") == 0


def test_error_message():
    limiter = RateLimiter(0, 60.0)
    with pytest.raises(RateLimitedError, match="rate limit exceeded"):
        limiter.allow("k")