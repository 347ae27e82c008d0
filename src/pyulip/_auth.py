"""Session token lifecycle.

The token manager caches one bearer token per client and logs in again when
it expires or is invalidated.  Concurrent callers that miss the cache share a
single in-flight login.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from pyulip._api.login import build_login_request, parse_login_response
from pyulip._breaker import CircuitBreaker
from pyulip._transport import Transport
from pyulip.config import UlipConfig
from pyulip.events import EventSink, UpstreamEvent, emit_event
from pyulip.exceptions import UlipError, UpstreamUnavailableError
from pyulip.session import AccessToken

_logger = logging.getLogger(__name__)


class TokenManager:
    """Owns the cached ULIP session token."""

    def __init__(
        self,
        config: UlipConfig,
        transport: Transport,
        breaker: CircuitBreaker,
        *,
        clock: Callable[[], float] = time.monotonic,
        on_event: EventSink | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._breaker = breaker
        self._clock = clock
        self._on_event = on_event
        self._token: AccessToken | None = None
        self._inflight: asyncio.Future[AccessToken] | None = None

    @property
    def current(self) -> AccessToken | None:
        """The cached token, if any (may be expired)."""
        return self._token

    async def get_token(self, request_id: str | None = None) -> str:
        """Return a valid bearer token, logging in only when needed."""
        cached = self._token
        if cached is not None and not cached.expired_at(self._clock()):
            return cached.token

        inflight = self._inflight
        if inflight is None:
            inflight = asyncio.ensure_future(self._login(request_id))
            inflight.add_done_callback(self._login_done)
            self._inflight = inflight
        else:
            _logger.debug("Joining in-flight ULIP login request_id=%s", request_id)

        # A cancelled waiter must not cancel the login other callers share.
        token = await asyncio.shield(inflight)
        return token.token

    def invalidate(self, token: str | None = None) -> None:
        """Drop the cached token.

        When *token* is given, the cache is only cleared if it still holds
        that token, so a late rejection cannot discard a newer login.
        """
        cached = self._token
        if cached is None:
            return
        if token is not None and cached.token != token:
            return
        _logger.info("ULIP session token invalidated")
        self._token = None

    def _login_done(self, future: asyncio.Future[AccessToken]) -> None:
        if self._inflight is future:
            self._inflight = None
        if not future.cancelled():
            # Mark the exception retrieved even if every waiter went away.
            future.exception()

    async def _login(self, request_id: str | None) -> AccessToken:
        login_url = self._config.resolved_login_url
        start = time.monotonic()
        status: int | None = None
        try:
            response = await self._transport.post_json(
                login_url,
                build_login_request(self._config),
                timeout=self._config.timeout,
            )
            token = parse_login_response(response, login_url=login_url)
        except UlipError as exc:
            duration_ms = int((time.monotonic() - start) * 1000)
            if isinstance(exc, UpstreamUnavailableError):
                status = exc.upstream_status
            _logger.error(
                "ULIP login error request_id=%s duration_ms=%d code=%s status=%s message=%s",
                request_id,
                duration_ms,
                exc.code,
                status,
                exc,
            )
            self._breaker.record_failure()
            emit_event(
                self._on_event,
                UpstreamEvent(
                    operation="login",
                    path=login_url,
                    attempt=0,
                    duration_ms=duration_ms,
                    outcome=exc.code,
                    status_code=status,
                    request_id=request_id,
                ),
            )
            exc.request_id = request_id
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        _logger.info("ULIP login completed request_id=%s duration_ms=%d", request_id, duration_ms)
        access = AccessToken(token=token, created_at=self._clock(), ttl=self._config.token_ttl)
        self._token = access
        self._breaker.record_success()
        emit_event(
            self._on_event,
            UpstreamEvent(
                operation="login",
                path=login_url,
                attempt=0,
                duration_ms=duration_ms,
                outcome="ok",
                request_id=request_id,
            ),
        )
        return access
