from __future__ import annotations

from weathergate.shared.middleware.rate_limit import InMemoryRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_limit_applies_per_key_within_window() -> None:
    clock = FakeClock()
    limiter = InMemoryRateLimiter(2, 60, clock=clock)

    assert [limiter.allow("a") for _ in range(3)] == [True, True, False]
    assert limiter.allow("b")

    clock.now = 61
    assert limiter.allow("a")


def test_idle_clients_are_forgotten() -> None:
    clock = FakeClock()
    limiter = InMemoryRateLimiter(5, 10, clock=clock)
    for n in range(100):
        limiter.allow(f"client-{n}")
    assert len(limiter) == 100

    clock.now = 11
    limiter.allow("fresh")

    assert len(limiter) == 1
