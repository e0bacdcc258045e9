import threading

import pytest

from vaultop.throttle import (
    ThrottleConfig,
    ThrottledError,
    Throttler,
    default_config,
)


class FakeClock:
    def __init__(self, now: float = 10.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allow_within_burst():
    throttler = Throttler(ThrottleConfig(rate=1, burst=3), clock=FakeClock())
    for _ in range(3):
        throttler.allow("key")
    assert throttler.remaining("key") == 0


def test_allow_exceeds_burst_raises():
    throttler = Throttler(ThrottleConfig(rate=0, burst=2))
    throttler.allow("k")
    throttler.allow("k")
    with pytest.raises(ThrottledError):
        throttler.allow("k")


def test_tokens_replenish_over_time():
    clock = FakeClock()
    throttler = Throttler(ThrottleConfig(rate=2, burst=2), clock=clock)
    throttler.allow("k")
    throttler.allow("k")
    with pytest.raises(ThrottledError):
        throttler.allow("k")
    clock.now += 1.0
    throttler.allow("k")
    assert throttler.remaining("k") == 1.0


def test_replenish_capped_at_burst():
    clock = FakeClock()
    throttler = Throttler(ThrottleConfig(rate=10, burst=2), clock=clock)
    throttler.allow("k")
    clock.now += 100.0
    throttler.allow("k")
    assert throttler.remaining("k") == 1.0


def test_reset_then_allow_after_exhaustion():
    throttler = Throttler(ThrottleConfig(rate=2, burst=2))
    throttler.allow("k")
    throttler.allow("k")
    throttler.reset("k")
    throttler.allow("k")
    assert throttler.remaining("k") == pytest.approx(1.0, abs=0.01)


def test_allow_independent_keys():
    throttler = Throttler(ThrottleConfig(rate=0, burst=1))
    throttler.allow("a")
    throttler.allow("b")
    with pytest.raises(ThrottledError):
        throttler.allow("a")


def test_remaining_decreases_with_use():
    throttler = Throttler(ThrottleConfig(rate=0, burst=5))
    throttler.allow("k")
    throttler.allow("k")
    assert throttler.remaining("k") == 3


def test_remaining_unknown_key_returns_burst():
    throttler = Throttler(ThrottleConfig(rate=1, burst=7))
    assert throttler.remaining("new") == 7


def test_reset_restores_full_bucket():
    throttler = Throttler(ThrottleConfig(rate=0, burst=2))
    throttler.allow("k")
    throttler.allow("k")
    throttler.reset("k")
    throttler.allow("k")
    assert throttler.remaining("k") == 1


def test_default_config_values():
    config = default_config()
    assert (config.rate, config.burst) == (5.0, 10)
    assert Throttler().remaining("any") == 10


def test_allow_concurrent_grants_exactly_burst():
    throttler = Throttler(default_config(), clock=FakeClock())
    granted = []
    lock = threading.Lock()

    def worker() -> None:
        try:
            throttler.allow("shared")
        except ThrottledError:
            return
        with lock:
            granted.append(1)

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(granted) == 10
    assert throttler.remaining("shared") == 0