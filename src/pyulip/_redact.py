"""Helpers for safe debug logging.

ULIP traffic carries credentials, bearer tokens and personal data (owner
names, addresses, dates of birth).  Those fields are masked before payloads
reach DEBUG logs, whether they arrive as JSON keys or as elements of the
VAHAN XML document.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_REDACTED = "<redacted>"

#: Lower-cased keys (JSON) or element names (XML) whose values are masked.
_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "username",
        "token",
        "id",
        "access_token",
        "accesstoken",
        "authorization",
        "cookie",
        # Personal data
        "dob",
        "rc_owner_name",
        "owner_name",
        "rc_f_name",
        "rc_permanent_address",
        "permanent_address",
        "rc_present_address",
        "present_address",
        "rc_mobile_no",
        "biofullname",
        "biopermadd1",
        "biopermadd2",
        "biotempadd1",
        "biotempadd2",
    }
)

_XML_ELEMENT = re.compile(r"<(?P<tag>[A-Za-z_][\w.-]*)(?P<attrs>[^>]*)>(?P<text>[^<]*)</(?P=tag)>")


def _is_sensitive(key: Any) -> bool:
    return str(key).lower() in _SENSITIVE_KEYS


def _redact_xml(text: str) -> str:
    def _mask(match: re.Match[str]) -> str:
        if not _is_sensitive(match["tag"]) or not match["text"].strip():
            return match[0]
        return f"<{match['tag']}{match['attrs']}>{_REDACTED}</{match['tag']}>"

    return _XML_ELEMENT.sub(_mask, text)


def _redact_text(text: str, max_string: int) -> str:
    if text.lstrip().startswith("<"):
        text = _redact_xml(text)
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    Mappings have sensitive keys masked, XML strings have sensitive element
    text masked, and long strings are truncated after masking.
    """
    if _depth > 20:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _redact_text(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    nested = _depth + 1
    if isinstance(value, Mapping):
        return {
            str(key): _REDACTED if _is_sensitive(key) else redact_for_log(item, max_string=max_string, _depth=nested)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, max_string=max_string, _depth=nested) for item in value]
    return repr(value)
