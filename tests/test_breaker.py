from __future__ import annotations

from pyulip._breaker import CircuitBreaker


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _breaker(clock: _Clock, *, threshold: int = 3, cooldown: float = 30.0) -> CircuitBreaker:
    return CircuitBreaker(enabled=True, threshold=threshold, cooldown=cooldown, clock=clock)


def test_opens_after_threshold_consecutive_failures() -> None:
    clock = _Clock()
    breaker = _breaker(clock)

    breaker.record_failure()
    breaker.record_failure()
    assert breaker.admit() is True

    breaker.record_failure()
    state = breaker.snapshot()
    assert state.is_open is True
    assert state.consecutive_failures == 3
    assert state.opened_at == clock.now
    assert breaker.admit() is False


def test_success_resets_failure_streak() -> None:
    breaker = _breaker(_Clock())

    breaker.record_failure()
    breaker.record_failure()
    breaker.record_success()
    breaker.record_failure()
    breaker.record_failure()

    assert breaker.admit() is True
    assert breaker.snapshot().consecutive_failures == 2


def test_stays_open_until_cooldown_strictly_elapses() -> None:
    clock = _Clock()
    breaker = _breaker(clock, cooldown=30.0)
    for _ in range(3):
        breaker.record_failure()

    clock.now += 30.0
    assert breaker.admit() is False

    clock.now += 0.5
    assert breaker.admit() is True
    state = breaker.snapshot()
    assert state.is_open is False
    assert state.consecutive_failures == 0


def test_failed_trial_call_reopens_with_fresh_opened_at() -> None:
    clock = _Clock()
    breaker = _breaker(clock)
    for _ in range(3):
        breaker.record_failure()
    first_opened_at = breaker.snapshot().opened_at

    clock.now += 31.0
    assert breaker.admit() is True
    breaker.record_failure()

    state = breaker.snapshot()
    assert state.is_open is True
    assert state.opened_at == clock.now
    assert state.opened_at != first_opened_at
    assert breaker.admit() is False


def test_successful_trial_call_keeps_circuit_closed() -> None:
    clock = _Clock()
    breaker = _breaker(clock)
    for _ in range(3):
        breaker.record_failure()

    clock.now += 31.0
    assert breaker.admit() is True
    breaker.record_success()

    # A single failure after recovery starts a new streak instead of re-opening.
    breaker.record_failure()
    state = breaker.snapshot()
    assert state.is_open is False
    assert state.consecutive_failures == 1
    assert breaker.admit() is True


def test_disabled_breaker_is_a_no_op() -> None:
    breaker = CircuitBreaker(enabled=False, threshold=1, cooldown=30.0)

    for _ in range(10):
        breaker.record_failure()

    assert breaker.admit() is True
    assert breaker.snapshot().consecutive_failures == 0


def test_neutral_trial_outcome_does_not_arm_a_later_failure() -> None:
    clock = _Clock()
    breaker = _breaker(clock, threshold=5)
    for _ in range(5):
        breaker.record_failure()

    clock.now += 31.0
    assert breaker.admit() is True
    breaker.record_neutral()

    breaker.record_failure()
    state = breaker.snapshot()
    assert state.is_open is False
    assert state.consecutive_failures == 1


def test_unreported_trial_call_expires_after_one_cooldown() -> None:
    clock = _Clock(now=0.0)
    breaker = _breaker(clock, threshold=5)
    for _ in range(5):
        breaker.record_failure()

    clock.now = 31.0
    assert breaker.admit() is True

    clock.now = 5000.0
    breaker.record_failure()
    state = breaker.snapshot()
    assert state.is_open is False
    assert state.consecutive_failures == 1
