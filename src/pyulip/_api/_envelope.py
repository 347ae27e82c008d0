"""Generic ULIP response envelope unwrapping.

ULIP answers every sub-service with roughly::

    {"error": "false", "code": "200", "message": "...",
     "response": [{"response": <payload>}]}

where ``<payload>`` is an object, a JSON-encoded string or (for VAHAN) an
XML string.  Some sub-services put the payload in a flat ``data`` field
instead.
"""

from __future__ import annotations

import json
from typing import Any, TypeAlias

from pyulip.exceptions import UpstreamBadResponseError, UpstreamRejectedError

Payload: TypeAlias = dict[str, Any] | list[Any] | str | None
"""Unwrapped payload shapes.  Normalizers narrow it with the ``expect_*`` helpers."""


def error_flag_set(value: Any) -> bool:
    """ULIP sends the error flag as a bool or as ``"true"``/``"false"`` strings."""
    return value is True or (isinstance(value, str) and value.strip().lower() == "true")


def _decode_nested(inner: Any) -> Any:
    if not isinstance(inner, str):
        return inner
    trimmed = inner.strip()
    if trimmed.startswith(("{", "[")):
        try:
            return json.loads(trimmed)
        except json.JSONDecodeError:
            return inner
    return inner


def unwrap_payload(raw: Any, *, path: str = "") -> Payload:
    """Extract the domain payload from a ULIP envelope.

    Raises
    ------
    UpstreamBadResponseError
        If *raw* is not a JSON object.
    UpstreamRejectedError
        If the envelope's error flag is set.
    """
    if not isinstance(raw, dict):
        raise UpstreamBadResponseError("Unexpected ULIP response", path=path)

    if error_flag_set(raw.get("error")):
        raise UpstreamRejectedError(
            f"ULIP returned an error: code={raw.get('code', '')} message={raw.get('message', '')}",
            path=path,
        )

    resp = raw.get("response")
    if isinstance(resp, list) and resp:
        first = resp[0]
        inner = first.get("response") if isinstance(first, dict) else None
        return _decode_nested(inner)
    if isinstance(resp, dict):
        return resp

    data = raw.get("data")
    if data:
        return data

    return raw


def expect_object(payload: Payload, *, path: str = "", what: str = "payload") -> dict[str, Any]:
    if isinstance(payload, dict):
        return payload
    raise UpstreamBadResponseError(
        f"Unexpected ULIP {what}: expected object, got {type(payload).__name__}",
        path=path,
    )


def expect_list(payload: Payload, *, path: str = "", what: str = "payload") -> list[Any]:
    if isinstance(payload, list):
        return payload
    raise UpstreamBadResponseError(
        f"Unexpected ULIP {what}: expected list, got {type(payload).__name__}",
        path=path,
    )


def expect_text(payload: Payload, *, path: str = "", what: str = "payload") -> str:
    if isinstance(payload, str):
        return payload
    raise UpstreamBadResponseError(
        f"Unexpected ULIP {what}: expected string, got {type(payload).__name__}",
        path=path,
    )
