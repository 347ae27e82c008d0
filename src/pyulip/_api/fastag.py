"""Toll tag endpoints.

Endpoints:
  - FASTAG/01 (transaction history)
  - FASTAG/02 (static tag details)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pyulip._api._envelope import Payload, expect_list, expect_object, unwrap_payload
from pyulip._constants import FASTAG_DETAIL_PATH, FASTAG_TXN_PATH
from pyulip._upstream import Caller
from pyulip.ingestion.normalize import as_object_list, normalize_string, pick_first
from pyulip.models.toll_tag import TollTagDetail, TollTagHistory, TollTagRecord, TollTransaction

_logger = logging.getLogger(__name__)

#: Keys under which FASTAG/02 may wrap its name/value list.
_DETAIL_LIST_KEYS: tuple[str, ...] = ("tagDetails", "vehicleDetails", "details", "detail", "data")
_ENTRY_NAME_KEYS: tuple[str, ...] = ("name", "key", "attribute")
_ENTRY_VALUE_KEYS: tuple[str, ...] = ("value", "val")


def name_value_mapping(payload: Payload) -> dict[str, Any]:
    """Turn FASTAG/02's flattened ``[{"name": ..., "value": ...}]`` list into a mapping.

    The list may come bare or wrapped in an object.  An object without such
    a list is taken to be the mapping already.  The first entry for a name
    wins.
    """
    if isinstance(payload, dict):
        wrapped = next(
            (payload[key] for key in _DETAIL_LIST_KEYS if isinstance(payload.get(key), list)),
            None,
        )
        if wrapped is None:
            return payload
        payload = wrapped
    entries = expect_list(payload, path=FASTAG_DETAIL_PATH, what="FASTAG detail payload")

    mapping: dict[str, Any] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = normalize_string(pick_first(entry, _ENTRY_NAME_KEYS))
        if name is None or name in mapping:
            continue
        mapping[name] = next((entry[key] for key in _ENTRY_VALUE_KEYS if key in entry), None)
    return mapping


def parse_transaction_history(payload: Payload) -> tuple[dict[str, Any], TollTagHistory]:
    """Split a FASTAG/01 payload into its top-level fields and history block."""
    root = expect_object(payload, path=FASTAG_TXN_PATH, what="FASTAG payload")
    vehicle = root.get("vehicle")
    vehicle_node = expect_object(vehicle, path=FASTAG_TXN_PATH, what="FASTAG vehicle") if vehicle else {}
    txn_list = vehicle_node.get("vehltxnList")
    txn_node: dict[str, Any] = txn_list if isinstance(txn_list, dict) else {}

    transactions = [TollTransaction.model_validate(txn) for txn in as_object_list(txn_node.get("txn"))]
    history = TollTagHistory.model_validate(
        {
            **txn_node,
            "errCode": vehicle_node.get("errCode"),
            "transactions": transactions,
        }
    )
    return root, history


def merge_toll_tag(
    vehicle_number: str,
    history_payload: Payload,
    detail_payload: Payload,
) -> TollTagRecord:
    """Merge both FASTAG answers; static details take precedence for identity fields."""
    root, history = parse_transaction_history(history_payload)
    tag = TollTagDetail.model_validate(name_value_mapping(detail_payload))

    first_txn_reg = history.transactions[0].vehicle_reg_no if history.transactions else None
    return TollTagRecord.model_validate(
        {
            "vehicle_number": tag.registration_number or first_txn_reg or vehicle_number,
            "result": root.get("result"),
            "respCode": root.get("respCode"),
            "ts": root.get("ts"),
            "vehicle": history,
            "tag": tag,
        }
    )


async def fetch_toll_tag_details(
    caller: Caller,
    vehicle_number: str,
    *,
    request_id: str | None = None,
) -> TollTagRecord:
    """Fetch transaction history and static tag details concurrently and merge them.

    A failure of either call fails the lookup and cancels the other call.
    """
    body = {"vehiclenumber": vehicle_number}
    try:
        async with asyncio.TaskGroup() as group:
            history_task = group.create_task(caller.call(FASTAG_TXN_PATH, body, request_id))
            detail_task = group.create_task(caller.call(FASTAG_DETAIL_PATH, body, request_id))
    except ExceptionGroup as failed:
        # Surface the first failure as-is so callers see a plain UlipError.
        raise failed.exceptions[0] from None

    record = merge_toll_tag(
        vehicle_number,
        unwrap_payload(history_task.result(), path=FASTAG_TXN_PATH),
        unwrap_payload(detail_task.result(), path=FASTAG_DETAIL_PATH),
    )
    _logger.debug(
        "FASTAG merged request_id=%s transactions=%d",
        request_id,
        len(record.vehicle.transactions),
    )
    return record
