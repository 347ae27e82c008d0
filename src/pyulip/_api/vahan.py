"""Vehicle registration endpoint.

Endpoint:
  - VAHAN/01

VAHAN answers with an XML document inside the envelope's string payload,
or with the literal ``"Vehicle Details not Found"``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any

from pyulip._api._envelope import expect_text, unwrap_payload
from pyulip._constants import VAHAN_PATH, VEHICLE_NOT_FOUND
from pyulip._redact import redact_for_log
from pyulip._upstream import Caller
from pyulip.exceptions import NotFoundError, UpstreamBadResponseError
from pyulip.models.registry import RegistryRecord

_logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_value(element: ET.Element) -> Any:
    children = list(element)
    if not children:
        text = (element.text or "").strip()
        return text or None
    return _children_to_dict(children)


def _children_to_dict(children: list[ET.Element]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for child in children:
        key = _local_name(child.tag)
        value = _element_value(child)
        if key not in result:
            result[key] = value
        elif isinstance(result[key], list):
            result[key].append(value)
        else:
            result[key] = [result[key], value]
    return result


def parse_vehicle_xml(xml_text: str) -> dict[str, Any]:
    """Flatten the VAHAN document's root element into a mapping.

    Child element text is trimmed, empty elements map to ``None``, nested
    elements become nested mappings and repeated tags become lists.

    Raises
    ------
    UpstreamBadResponseError
        If the text is not well-formed XML.
    """
    try:
        # Bytes, so documents carrying an encoding declaration parse too.
        root = ET.fromstring(xml_text.strip().encode("utf-8"))
    except ET.ParseError as exc:
        raise UpstreamBadResponseError(
            f"VAHAN payload is not valid XML: {exc}",
            path=VAHAN_PATH,
        ) from exc
    return _children_to_dict(list(root))


def _parse_registry(xml_text: str, vehicle_number: str) -> RegistryRecord:
    fields = parse_vehicle_xml(xml_text)
    _logger.debug("VAHAN fields parsed=%s", redact_for_log(fields))
    return RegistryRecord.model_validate({**fields, "vehicle_number": vehicle_number})


async def fetch_registry_details(
    caller: Caller,
    vehicle_number: str,
    *,
    request_id: str | None = None,
) -> RegistryRecord:
    """Look up registration details for *vehicle_number*.

    Raises
    ------
    NotFoundError
        VAHAN reported that the vehicle does not exist.
    UpstreamBadResponseError
        The payload was not an XML string.
    """
    raw = await caller.call(VAHAN_PATH, {"vehiclenumber": vehicle_number}, request_id)
    payload = unwrap_payload(raw, path=VAHAN_PATH)
    xml_text = expect_text(payload, path=VAHAN_PATH, what="VAHAN response structure")

    if xml_text.strip() == VEHICLE_NOT_FOUND:
        raise NotFoundError("Vehicle details not found", path=VAHAN_PATH, request_id=request_id)

    _logger.debug("VAHAN payload request_id=%s xml=%s", request_id, redact_for_log(xml_text))
    return _parse_registry(xml_text, vehicle_number)
