from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from pyulip import (
    CircuitOpenError,
    NotFoundError,
    RequestValidationError,
    UlipClient,
    UlipConfig,
    UlipError,
    UpstreamTimeoutError,
    error_response,
)

_BASE_URL = "https://ulip.example.gov.in/ulip/v1.0.0"

_VEHICLE_XML = (
    "<VehicleDetails><rc_regn_no>MH12AB1234</rc_regn_no>"
    "<rc_owner_name>RAMESH KUMAR</rc_owner_name><rc_fuel_desc>PETROL</rc_fuel_desc></VehicleDetails>"
)

_LICENCE = {
    "dldetobj": {
        "bioObj": {"bioFullName": "ANITA SHARMA"},
        "dlobj": {"dlStatus": "Active", "dlNtValdtoDt": "14-03-2039"},
        "dlcovs": [],
    }
}


def _envelope(payload: Any) -> dict[str, Any]:
    return {"error": "false", "code": "200", "response": [{"response": payload}]}


class _RoutingTransport:
    """Answers by URL suffix; a missing route raises a timeout."""

    def __init__(self, routes: dict[str, Any]) -> None:
        self._routes = routes
        self.urls: list[str] = []

    async def post_json(self, url: str, body: Any, *, headers: Any = None, timeout: float) -> Any:
        self.urls.append(url)
        if url.endswith("/user/login"):
            return {"response": {"id": "tok-1"}}
        for suffix, answer in self._routes.items():
            if url.endswith(suffix):
                return answer
        raise UpstreamTimeoutError(f"no route for {url}")


async def _no_sleep(_delay: float) -> None:
    return None


def _config(**overrides: Any) -> UlipConfig:
    return UlipConfig(username="svc-gateway", password="secret", base_url=_BASE_URL, **overrides)


@pytest.mark.asyncio
async def test_registry_lookup_end_to_end() -> None:
    transport = _RoutingTransport({"/VAHAN/01": _envelope(_VEHICLE_XML)})

    async with UlipClient(_config(), transport=transport) as client:
        record = await client.fetch_registry_details(" MH12AB1234 ")

    assert record.vehicle_number == "MH12AB1234"
    assert record.fuel_type == "PETROL"
    assert transport.urls == [f"{_BASE_URL}/user/login", f"{_BASE_URL}/VAHAN/01"]


@pytest.mark.asyncio
async def test_licence_lookup_end_to_end() -> None:
    transport = _RoutingTransport({"/SARATHI/01": _envelope(_LICENCE)})

    async with UlipClient(_config(), transport=transport) as client:
        record = await client.fetch_licence_details("MH1220190001234", "1990-01-01", today=date(2026, 10, 18))

    assert record.full_name == "ANITA SHARMA"
    assert record.valid_to == "2039-03-14"


@pytest.mark.asyncio
async def test_toll_tag_lookup_end_to_end() -> None:
    transport = _RoutingTransport(
        {
            "/FASTAG/01": _envelope({"result": "SUCCESS", "vehicle": {"errCode": "000"}}),
            "/FASTAG/02": _envelope([{"name": "tagId", "value": "T1"}]),
        }
    )

    async with UlipClient(_config(), transport=transport) as client:
        record = await client.fetch_toll_tag_details("MH12AB1234")

    assert record.tag.tag_id == "T1"
    assert record.result == "SUCCESS"
    assert transport.urls.count(f"{_BASE_URL}/user/login") == 1


@pytest.mark.asyncio
async def test_invalid_vehicle_number_fails_before_any_call() -> None:
    transport = _RoutingTransport({})

    async with UlipClient(_config(), transport=transport) as client:
        with pytest.raises(RequestValidationError) as exc_info:
            await client.fetch_registry_details("X", request_id="req-1")

    assert transport.urls == []
    assert exc_info.value.request_id == "req-1"
    assert exc_info.value.details[0]["path"] == ["vehicle_number"]


@pytest.mark.asyncio
@pytest.mark.parametrize("dob", ["01-01-1990", "1990-02-30", ""])
async def test_invalid_date_of_birth_fails_before_any_call(dob: str) -> None:
    transport = _RoutingTransport({})

    async with UlipClient(_config(), transport=transport) as client:
        with pytest.raises(RequestValidationError):
            await client.fetch_licence_details("MH1220190001234", dob)

    assert transport.urls == []


@pytest.mark.asyncio
async def test_not_found_maps_to_exposed_error_body() -> None:
    transport = _RoutingTransport({"/VAHAN/01": _envelope("Vehicle Details not Found")})

    async with UlipClient(_config(), transport=transport) as client:
        with pytest.raises(NotFoundError) as exc_info:
            await client.fetch_registry_details("MH12AB1234", request_id="req-2")

    status, body = error_response(exc_info.value, "req-2")
    assert status == 404
    assert body == {"requestId": "req-2", "error": {"code": "NOT_FOUND", "message": "Vehicle details not found"}}


@pytest.mark.asyncio
async def test_breaker_is_shared_across_lookups() -> None:
    transport = _RoutingTransport({})
    config = _config(retry_count=0, circuit_breaker_enabled=True, circuit_breaker_threshold=2)

    async with UlipClient(config, transport=transport, sleep=_no_sleep) as client:
        with pytest.raises(UpstreamTimeoutError):
            await client.fetch_registry_details("MH12AB1234")
        with pytest.raises(UpstreamTimeoutError):
            await client.fetch_licence_details("MH1220190001234", "1990-01-01")
        with pytest.raises(CircuitOpenError):
            await client.fetch_registry_details("MH12AB1234")

    assert client.breaker.is_open
    assert len(transport.urls) == 3


@pytest.mark.asyncio
async def test_lookup_outside_context_manager_fails() -> None:
    client = UlipClient(_config())

    with pytest.raises(UlipError, match="not initialized"):
        await client.fetch_registry_details("MH12AB1234")


def test_error_response_hides_internal_messages() -> None:
    status, body = error_response(UpstreamTimeoutError("Request to https://internal timed out"), "req-3")

    assert status == 504
    assert body["error"] == {"code": "ULIP_TIMEOUT", "message": "Request failed"}


def test_error_response_includes_validation_details() -> None:
    exc = RequestValidationError("Invalid vehicle number", details=[{"message": "too short", "path": ["x"]}])

    status, body = error_response(exc)

    assert status == 422
    assert body["error"]["details"] == [{"message": "too short", "path": ["x"]}]


def test_error_response_for_unexpected_exceptions() -> None:
    status, body = error_response(KeyError("boom"), "req-4")

    assert status == 500
    assert body == {"requestId": "req-4", "error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}}
