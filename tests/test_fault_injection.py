"""Tests for the read-path fault injector."""

import random

import pytest

from shared.exceptions import InjectedFaultError
from shared.fault_injection import FaultInjector


def test_zero_percent_never_draws(fixed_random):
    rng = fixed_random(1)
    injector = FaultInjector(rng)

    for _ in range(1000):
        assert injector.apply("entity", 0) == "entity"

    assert rng.calls == 0


def test_zero_percent_never_fails_with_real_random():
    injector = FaultInjector(random.Random(42))

    for _ in range(1000):
        injector.apply("entity", 0)


def test_hundred_percent_always_fails():
    injector = FaultInjector(random.Random(42))

    for _ in range(1000):
        with pytest.raises(InjectedFaultError, match="Something went wrong"):
            injector.apply("entity", 100)


@pytest.mark.parametrize(
    "fault_percent, draw, fails",
    [
        (1, 1, True),
        (1, 2, False),
        (50, 50, True),
        (50, 51, False),
        (99, 100, False),
        (100, 100, True),
    ],
)
def test_fault_fires_when_percent_reaches_draw(fixed_random, fault_percent, draw, fails):
    injector = FaultInjector(fixed_random(draw))

    if fails:
        with pytest.raises(InjectedFaultError):
            injector.apply("entity", fault_percent)
    else:
        assert injector.apply("entity", fault_percent) == "entity"


def test_draws_from_closed_range():
    class RecordingRandom:
        def randint(self, a, b):
            self.bounds = (a, b)
            return b

    rng = RecordingRandom()
    with pytest.raises(InjectedFaultError):
        FaultInjector(rng).apply("entity", 100)

    assert rng.bounds == (1, 100)


def test_one_percent_fails_rarely():
    injector = FaultInjector(random.Random(7))
    failures = 0

    for _ in range(10000):
        try:
            injector.apply("entity", 1)
        except InjectedFaultError:
            failures += 1

    assert 30 < failures < 200
