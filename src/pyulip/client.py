"""High-level async client for the ULIP lookup services."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any

import aiohttp
from pydantic import ValidationError

from pyulip._api import fastag as _fastag_api
from pyulip._api import sarathi as _sarathi_api
from pyulip._api import vahan as _vahan_api
from pyulip._auth import TokenManager
from pyulip._breaker import CircuitBreaker
from pyulip._transport import HttpTransport, Transport
from pyulip._upstream import UpstreamCaller
from pyulip.config import UlipConfig
from pyulip.events import EventSink
from pyulip.exceptions import RequestValidationError, UlipError
from pyulip.models.licence import LicenceRecord
from pyulip.models.registry import RegistryRecord
from pyulip.models.requests import LicenceLookupRequest, VehicleLookupRequest
from pyulip.models.toll_tag import TollTagRecord


def _validation_details(exc: ValidationError) -> list[dict[str, Any]]:
    return [{"message": err["msg"], "path": list(err["loc"])} for err in exc.errors()]


class UlipClient:
    """Async client for registry, licence and toll-tag lookups.

    The client owns one token manager and one circuit breaker; every lookup
    made through it shares them.

    Usage::

        async with UlipClient(UlipConfig.from_env()) as client:
            record = await client.fetch_registry_details("MH12AB1234")
    """

    def __init__(
        self,
        config: UlipConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        breaker: CircuitBreaker | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_upstream_event: EventSink | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._sleep = sleep
        self._on_event = on_upstream_event
        self._breaker = breaker or CircuitBreaker(
            enabled=config.circuit_breaker_enabled,
            threshold=config.circuit_breaker_threshold,
            cooldown=config.circuit_breaker_cooldown,
        )
        self._tokens: TokenManager | None = None
        self._caller: UpstreamCaller | None = None
        if transport is not None:
            self._wire(transport)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> UlipClient:
        if not self._external_transport:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._wire(HttpTransport(self._http_session))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None
            self._caller = None

    def _wire(self, transport: Transport) -> None:
        self._transport = transport
        self._tokens = TokenManager(self._config, transport, self._breaker, on_event=self._on_event)
        self._caller = UpstreamCaller(
            self._config,
            transport,
            self._tokens,
            self._breaker,
            sleep=self._sleep,
            on_event=self._on_event,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    @property
    def tokens(self) -> TokenManager:
        if self._tokens is None:
            raise UlipError("Client not initialized. Use 'async with UlipClient(...) as client:'")
        return self._tokens

    def _require_caller(self) -> UpstreamCaller:
        if self._caller is None:
            raise UlipError("Client not initialized. Use 'async with UlipClient(...) as client:'")
        return self._caller

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def fetch_registry_details(
        self,
        vehicle_number: str,
        *,
        request_id: str | None = None,
    ) -> RegistryRecord:
        """Fetch vehicle registration details (VAHAN)."""
        try:
            req = VehicleLookupRequest(vehicle_number=vehicle_number)
        except ValidationError as exc:
            raise RequestValidationError(
                "Invalid vehicle number",
                request_id=request_id,
                details=_validation_details(exc),
            ) from exc
        return await _vahan_api.fetch_registry_details(
            self._require_caller(),
            req.vehicle_number,
            request_id=request_id,
        )

    async def fetch_licence_details(
        self,
        licence_number: str,
        date_of_birth: str,
        *,
        request_id: str | None = None,
        today: date | None = None,
    ) -> LicenceRecord:
        """Fetch an active, unexpired driving licence (SARATHI).

        *today* overrides the UTC date the expiry check compares against.
        """
        try:
            req = LicenceLookupRequest(licence_number=licence_number, date_of_birth=date_of_birth)
        except ValidationError as exc:
            raise RequestValidationError(
                "Invalid licence lookup",
                request_id=request_id,
                details=_validation_details(exc),
            ) from exc
        return await _sarathi_api.fetch_licence_details(
            self._require_caller(),
            req.licence_number,
            req.date_of_birth,
            request_id=request_id,
            today=today,
        )

    async def fetch_toll_tag_details(
        self,
        vehicle_number: str,
        *,
        request_id: str | None = None,
    ) -> TollTagRecord:
        """Fetch toll-tag transaction history and static tag details (FASTAG)."""
        try:
            req = VehicleLookupRequest(vehicle_number=vehicle_number)
        except ValidationError as exc:
            raise RequestValidationError(
                "Invalid vehicle number",
                request_id=request_id,
                details=_validation_details(exc),
            ) from exc
        return await _fastag_api.fetch_toll_tag_details(
            self._require_caller(),
            req.vehicle_number,
            request_id=request_id,
        )
