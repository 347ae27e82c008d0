"""Normalization helpers.

Centralizes defensive parsing of upstream scalars.  None of these raise:
a field the upstream garbled becomes ``None`` instead of failing the record.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

_DMY_DASH = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")

# Formats seen across SARATHI deployments, tried after ISO parsing.
_DATE_FORMATS: tuple[str, ...] = (
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%b %d, %Y",
    "%b %d, %Y %I:%M:%S %p",
)


def normalize_string(value: Any) -> str | None:
    """Trimmed text, or ``None`` for blanks and non-scalar values."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def reorder_dmy_date(value: Any) -> str | None:
    """Rewrite ``DD-MM-YYYY`` as ``YYYY-MM-DD``; pass anything else through.

    Only dash-separated values with segment lengths 2/2/4 are reordered, so
    ambiguous values are never guessed at.
    """
    text = normalize_string(value) if isinstance(value, str) else None
    if text is None:
        return None
    parts = text.split("-")
    if len(parts) == 3 and [len(p) for p in parts] == [2, 2, 4]:
        day, month, year = parts
        return f"{year}-{month}-{day}"
    return text


def parse_date(value: Any) -> date | None:
    """Parse the date forms ULIP uses; ``None`` when unrecognised."""
    text = normalize_string(value) if isinstance(value, str) else None
    if text is None:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def normalize_date(value: Any) -> str | None:
    """ISO ``YYYY-MM-DD`` for recognised dates, trimmed text otherwise."""
    parsed = parse_date(value)
    if parsed is not None:
        return parsed.isoformat()
    text = normalize_string(value) if isinstance(value, str) else None
    if text is not None and (match := _DMY_DASH.match(text)):
        day, month, year = match.groups()
        return f"{year}-{month}-{day}"
    return text


def is_meaningful(value: Any) -> bool:
    """Return True if the value counts as present for alias resolution."""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    if value == {}:
        return False
    return bool(value != [])


def pick_first(data: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """First meaningful value among *keys* in *data*, else ``None``."""
    for key in keys:
        value = data.get(key)
        if is_meaningful(value):
            return value
    return None


def as_object_list(value: Any) -> list[dict[str, Any]]:
    """Upstream lists collapse to a single object when they hold one item."""
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    if isinstance(value, dict):
        return [value]
    return []
