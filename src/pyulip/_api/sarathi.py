"""Driving licence endpoint.

Endpoint:
  - SARATHI/01
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import Any

from pyulip._api._envelope import expect_object, unwrap_payload
from pyulip._constants import SARATHI_PATH
from pyulip._upstream import Caller
from pyulip.exceptions import BusinessRuleViolationError
from pyulip.ingestion.normalize import as_object_list, parse_date
from pyulip.models.licence import LicenceCategory, LicenceRecord

_logger = logging.getLogger(__name__)


def _section(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    return expect_object(value, path=SARATHI_PATH, what=what)


def _licence_details(root: dict[str, Any]) -> dict[str, Any]:
    """``dldetobj`` arrives either as an object or as a one-item list."""
    raw = root.get("dldetobj")
    if isinstance(raw, list):
        return _section(raw[0], "SARATHI licence details") if raw else {}
    return _section(raw, "SARATHI licence details")


def dedupe_categories(raw_covs: Any) -> list[LicenceCategory]:
    """Map ``dlcovs`` entries, keeping the first of each duplicate.

    Duplicates share licence number, category abbreviation and category
    description.
    """
    categories: list[LicenceCategory] = []
    seen: set[tuple[str, str, str]] = set()
    for cov in as_object_list(raw_covs):
        category = LicenceCategory.model_validate(cov)
        key = category.dedupe_key
        if key in seen:
            continue
        seen.add(key)
        categories.append(category)
    return categories


def _today() -> date:
    return datetime.now(UTC).date()


def ensure_licence_valid(record: LicenceRecord, *, today: date | None = None) -> None:
    """Reject licences that are inactive or not valid beyond *today*.

    Raises
    ------
    BusinessRuleViolationError
        With a caller-facing message naming the failed rule.
    """
    status = record.licence_status
    if not status or status.lower() != "active":
        raise BusinessRuleViolationError("Licence is not active", path=SARATHI_PATH)

    if not record.valid_to:
        raise BusinessRuleViolationError("Licence validity end date missing", path=SARATHI_PATH)

    valid_to = parse_date(record.valid_to)
    if valid_to is None or not valid_to > (today or _today()):
        raise BusinessRuleViolationError("Licence has expired", path=SARATHI_PATH)


def parse_licence(
    payload: Any,
    licence_number: str,
    date_of_birth: str,
) -> LicenceRecord:
    """Map an unwrapped SARATHI payload to a :class:`LicenceRecord`."""
    root = expect_object(payload, path=SARATHI_PATH, what="SARATHI payload")
    details = _licence_details(root)
    bio = _section(details.get("bioObj"), "SARATHI holder details")
    dl = _section(details.get("dlobj"), "SARATHI licence object")

    return LicenceRecord.model_validate(
        {
            **bio,
            **dl,
            "dl_number": licence_number,
            "dob": date_of_birth,
            "categories": dedupe_categories(details.get("dlcovs")),
        }
    )


async def fetch_licence_details(
    caller: Caller,
    licence_number: str,
    date_of_birth: str,
    *,
    request_id: str | None = None,
    today: date | None = None,
) -> LicenceRecord:
    """Look up a driving licence and enforce that it is active and unexpired.

    Raises
    ------
    BusinessRuleViolationError
        The licence exists but is inactive, has no end date, or has expired.
    UpstreamBadResponseError
        The payload did not have the expected shape.
    """
    raw = await caller.call(
        SARATHI_PATH,
        {"dlnumber": licence_number, "dob": date_of_birth},
        request_id,
    )
    payload = unwrap_payload(raw, path=SARATHI_PATH)
    record = parse_licence(payload, licence_number, date_of_birth)
    try:
        ensure_licence_valid(record, today=today)
    except BusinessRuleViolationError as exc:
        exc.request_id = request_id
        _logger.info("SARATHI licence rejected request_id=%s reason=%s", request_id, exc)
        raise
    return record
