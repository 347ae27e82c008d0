"""Bounded retry loop with exponential backoff.

The loop knows nothing about ULIP: callers decide which failures are worth
repeating through ``should_retry``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pyulip._constants import BACKOFF_BASE_DELAY, BACKOFF_MAX_DELAY

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int) -> float:
    """Seconds to wait before *attempt* (``0`` for the first attempt)."""
    if attempt <= 0:
        return 0.0
    return min(BACKOFF_BASE_DELAY * 2 ** (attempt - 1), BACKOFF_MAX_DELAY)


def _always(_exc: BaseException) -> bool:
    return True


async def run_with_backoff(
    operation: Callable[[int], Awaitable[T]],
    max_retries: int,
    *,
    should_retry: Callable[[BaseException], bool] = _always,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    request_id: str | None = None,
) -> T:
    """Run ``operation(attempt)`` until it succeeds or the budget is spent.

    Parameters
    ----------
    operation
        Coroutine factory called with the attempt number (``0`` first).
    max_retries
        Retries after the first attempt; at most ``max_retries + 1`` calls.
    should_retry
        Predicate deciding whether a failure may be retried.  Failures it
        rejects propagate immediately.
    sleep
        Awaitable used for the delay; injectable for tests.

    Returns
    -------
    T
        The first successful result.  The error of the final attempt
        propagates unchanged.
    """
    attempt = 0
    while True:
        try:
            return await operation(attempt)
        except Exception as exc:
            if attempt >= max_retries or not should_retry(exc):
                raise
            attempt += 1
            delay = backoff_delay(attempt)
            _logger.warning(
                "Retrying ULIP call after failure request_id=%s attempt=%d delay=%.1fs error=%s",
                request_id,
                attempt,
                delay,
                type(exc).__name__,
            )
            await sleep(delay)
