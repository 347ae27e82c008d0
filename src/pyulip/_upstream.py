"""Upstream call orchestration.

One :meth:`UpstreamCaller.call` per sub-service request: breaker check, token,
POST with per-attempt timeout, retry of retryable failures with backoff, and
breaker bookkeeping.  The decoded body is returned untouched; interpreting
the envelope is the normalizers' job.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

from pyulip._auth import TokenManager
from pyulip._backoff import run_with_backoff
from pyulip._breaker import CircuitBreaker
from pyulip._transport import Transport
from pyulip.config import UlipConfig, join_url
from pyulip.events import EventSink, UpstreamEvent, emit_event
from pyulip.exceptions import (
    CircuitOpenError,
    UlipError,
    UpstreamUnavailableError,
)

_logger = logging.getLogger(__name__)


def is_retryable(exc: BaseException) -> bool:
    """Only transient failures are repeated; everything else fails fast."""
    return isinstance(exc, UlipError) and exc.retryable


class UpstreamCaller:
    """Resilient caller for ULIP sub-service paths (e.g. ``VAHAN/01``)."""

    def __init__(
        self,
        config: UlipConfig,
        transport: Transport,
        tokens: TokenManager,
        breaker: CircuitBreaker,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_event: EventSink | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._tokens = tokens
        self._breaker = breaker
        self._sleep = sleep
        self._on_event = on_event

    def _circuit_open(self, path: str, request_id: str | None) -> CircuitOpenError:
        return CircuitOpenError("ULIP temporarily unavailable", path=path, request_id=request_id)

    async def call(
        self,
        path: str,
        body: Mapping[str, Any],
        request_id: str | None = None,
    ) -> Any:
        """POST *body* to sub-service *path* and return the decoded JSON body.

        Raises
        ------
        CircuitOpenError
            Circuit is open; no HTTP request was made.
        UpstreamTimeoutError
            The final attempt exceeded the per-attempt timeout.
        UpstreamUnavailableError
            The final attempt got an error status or a broken connection.
        UpstreamBadResponseError
            The body was not JSON.
        """
        if not self._breaker.admit():
            raise self._circuit_open(path, request_id)

        token = await self._tokens.get_token(request_id)
        url = join_url(self._config.base_url, path)

        async def _attempt(attempt: int) -> Any:
            nonlocal token
            if attempt > 0:
                if not self._breaker.admit():
                    raise self._circuit_open(path, request_id)
                token = await self._tokens.get_token(request_id)
            return await self._post_once(url, body, token, attempt, request_id)

        return await run_with_backoff(
            _attempt,
            self._config.retry_count,
            should_retry=is_retryable,
            sleep=self._sleep,
            request_id=request_id,
        )

    async def _post_once(
        self,
        url: str,
        body: Mapping[str, Any],
        token: str,
        attempt: int,
        request_id: str | None,
    ) -> Any:
        start = time.monotonic()
        try:
            data = await self._transport.post_json(
                url,
                body,
                headers={"authorization": f"Bearer {token}"},
                timeout=self._config.timeout,
            )
        except asyncio.CancelledError:
            self._breaker.record_neutral()
            raise
        except UlipError as exc:
            duration_ms = int((time.monotonic() - start) * 1000)
            status = exc.upstream_status if isinstance(exc, UpstreamUnavailableError) else None
            _logger.error(
                "ULIP call error request_id=%s url=%s attempt=%d duration_ms=%d code=%s status=%s",
                request_id,
                url,
                attempt,
                duration_ms,
                exc.code,
                status,
            )
            counts_against_breaker = True
            if isinstance(exc, UpstreamUnavailableError):
                if exc.auth_rejected:
                    self._tokens.invalidate(token)
                counts_against_breaker = exc.counts_against_breaker
            if counts_against_breaker:
                self._breaker.record_failure()
            else:
                self._breaker.record_neutral()
            emit_event(
                self._on_event,
                UpstreamEvent(
                    operation="call",
                    path=url,
                    attempt=attempt,
                    duration_ms=duration_ms,
                    outcome=exc.code,
                    status_code=status,
                    request_id=request_id,
                ),
            )
            exc.request_id = request_id
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        _logger.info(
            "ULIP call completed request_id=%s url=%s attempt=%d duration_ms=%d",
            request_id,
            url,
            attempt,
            duration_ms,
        )
        self._breaker.record_success()
        emit_event(
            self._on_event,
            UpstreamEvent(
                operation="call",
                path=url,
                attempt=attempt,
                duration_ms=duration_ms,
                outcome="ok",
                request_id=request_id,
            ),
        )
        return data


class Caller(Protocol):
    """Structural interface the normalizers depend on.

    :class:`UpstreamCaller` is the production implementation; tests pass
    doubles returning canned envelopes.
    """

    async def call(
        self,
        path: str,
        body: Mapping[str, Any],
        request_id: str | None = None,
    ) -> Any:
        ...
