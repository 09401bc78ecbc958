from __future__ import annotations

from src.org_console.org_console.common.cache import TTLValue


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_value_expires_after_ttl():
    clock = FakeClock()
    cache = TTLValue(120, clock=clock)
    cache.set(["a"])

    clock.now += 119
    assert cache.get() == ["a"]

    clock.now += 1
    assert cache.get() is None


def test_clear_drops_value():
    cache = TTLValue(60)
    cache.set(1)
    cache.clear()
    assert cache.get() is None
