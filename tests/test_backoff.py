from __future__ import annotations

import pytest

from pyulip._backoff import backoff_delay, run_with_backoff
from pyulip.exceptions import UpstreamBadResponseError, UpstreamTimeoutError


class _Sleeper:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def test_backoff_delay_doubles_and_caps_at_eight_seconds() -> None:
    assert [backoff_delay(n) for n in range(7)] == [0.0, 1.0, 2.0, 4.0, 8.0, 8.0, 8.0]


@pytest.mark.asyncio
async def test_run_with_backoff_makes_at_most_retries_plus_one_attempts() -> None:
    sleeper = _Sleeper()
    attempts: list[int] = []

    async def _op(attempt: int) -> str:
        attempts.append(attempt)
        raise UpstreamTimeoutError(f"attempt {attempt}")

    with pytest.raises(UpstreamTimeoutError) as exc_info:
        await run_with_backoff(_op, 5, sleep=sleeper)

    assert attempts == [0, 1, 2, 3, 4, 5]
    assert sleeper.delays == [1.0, 2.0, 4.0, 8.0, 8.0]
    # The final attempt's error propagates unchanged.
    assert str(exc_info.value) == "attempt 5"


@pytest.mark.asyncio
async def test_run_with_backoff_returns_first_success() -> None:
    sleeper = _Sleeper()

    async def _op(attempt: int) -> str:
        if attempt < 2:
            raise UpstreamTimeoutError("slow")
        return "ok"

    assert await run_with_backoff(_op, 3, sleep=sleeper) == "ok"
    assert sleeper.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_run_with_backoff_zero_retries_calls_once() -> None:
    sleeper = _Sleeper()
    calls = 0

    async def _op(_attempt: int) -> str:
        nonlocal calls
        calls += 1
        raise UpstreamTimeoutError("slow")

    with pytest.raises(UpstreamTimeoutError):
        await run_with_backoff(_op, 0, sleep=sleeper)

    assert calls == 1
    assert sleeper.delays == []


@pytest.mark.asyncio
async def test_run_with_backoff_stops_on_non_retryable_error() -> None:
    sleeper = _Sleeper()
    calls = 0

    async def _op(_attempt: int) -> str:
        nonlocal calls
        calls += 1
        raise UpstreamBadResponseError("garbled")

    with pytest.raises(UpstreamBadResponseError):
        await run_with_backoff(_op, 4, should_retry=lambda exc: exc.retryable, sleep=sleeper)

    assert calls == 1
    assert sleeper.delays == []
