"""Circuit breaker guarding the ULIP upstream.

States are Closed and Open.  Half-open is not stored: the first ``admit()``
after the cooldown closes the circuit and lets that call through as a trial.
A failed trial call re-opens the circuit immediately.

A trial call that ends without a counted outcome (``record_neutral()``, or no
report within one cooldown) is dropped, so later failures count normally
against the threshold.

All transitions are plain synchronous methods.  Under asyncio nothing can
interleave inside them, so the event loop is the single writer.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CircuitState:
    """Read-only view of the breaker counters."""

    is_open: bool
    consecutive_failures: int
    opened_at: float | None


class CircuitBreaker:
    """Consecutive-failure circuit breaker.

    Parameters
    ----------
    enabled
        When ``False`` every method is a no-op and ``admit()`` is always true.
    threshold
        Consecutive failures that open the circuit.
    cooldown
        Seconds the circuit stays open before a trial call is admitted.
    clock
        Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        *,
        enabled: bool = True,
        threshold: int = 5,
        cooldown: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._enabled = enabled
        self._threshold = threshold
        self._cooldown = cooldown
        self._clock = clock
        self._open = False
        self._failures = 0
        self._opened_at: float | None = None
        self._trial_until: float | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_open(self) -> bool:
        return self._open

    def snapshot(self) -> CircuitState:
        return CircuitState(
            is_open=self._open,
            consecutive_failures=self._failures,
            opened_at=self._opened_at,
        )

    def admit(self) -> bool:
        """Return whether a call may proceed.  ``False`` means fail fast."""
        if not self._enabled or not self._open:
            return True
        now = self._clock()
        opened_at = self._opened_at if self._opened_at is not None else now
        if now - opened_at > self._cooldown:
            self._open = False
            self._failures = 0
            self._opened_at = None
            self._trial_until = now + self._cooldown
            _logger.warning("ULIP circuit breaker half-open (cooldown elapsed), trial call allowed through")
            return True
        return False

    def record_success(self) -> None:
        if not self._enabled:
            return
        self._failures = 0
        self._trial_until = None
        if self._open:
            self._open = False
            self._opened_at = None
            _logger.info("ULIP circuit breaker closed")

    def record_failure(self) -> None:
        if not self._enabled:
            return
        self._failures += 1
        if self._take_trial():
            self._trip()
            return
        if not self._open and self._failures >= self._threshold:
            self._trip()

    def record_neutral(self) -> None:
        """Close out an admitted call whose outcome says nothing about upstream health."""
        self._trial_until = None

    def _take_trial(self) -> bool:
        """Consume the pending trial call; true if it is still within its window."""
        trial_until = self._trial_until
        self._trial_until = None
        return trial_until is not None and self._clock() <= trial_until

    def _trip(self) -> None:
        self._open = True
        self._opened_at = self._clock()
        _logger.error("ULIP circuit breaker opened failure_count=%d", self._failures)
