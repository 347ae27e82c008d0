#!/usr/bin/env python3
"""Run one ULIP lookup from the command line.

Logs in with the ``ULIP_*`` environment configuration, performs a single
registry, licence or toll-tag lookup and prints the normalized record as
JSON.  Failures are printed as the error body a gateway would answer with.

Usage
-----
Set environment variables and run::

    export ULIP_USERNAME="svc-gateway"
    export ULIP_PASSWORD="..."
    export ULIP_BASE_URL="https://www.ulipstaging.dpiit.gov.in/ulip/v1.0.0"
    python scripts/lookup.py vehicle MH12AB1234
    python scripts/lookup.py licence MH1220190001234 --dob 1990-01-01
    python scripts/lookup.py toll-tag MH12AB1234 --json-events
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import uuid
from dataclasses import asdict
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyulip import UlipClient, UlipConfig, UlipError, UpstreamEvent, error_response  # noqa: E402


def _print_event(event: UpstreamEvent) -> None:
    print(json.dumps(asdict(event)), file=sys.stderr)


async def _lookup(client: UlipClient, args: argparse.Namespace, request_id: str) -> Any:
    if args.kind == "vehicle":
        return await client.fetch_registry_details(args.number, request_id=request_id)
    if args.kind == "licence":
        return await client.fetch_licence_details(args.number, args.dob, request_id=request_id)
    return await client.fetch_toll_tag_details(args.number, request_id=request_id)


async def main() -> int:
    parser = argparse.ArgumentParser(description="Run a single ULIP lookup and print the record.")
    parser.add_argument("kind", choices=("vehicle", "licence", "toll-tag"), help="Lookup to run")
    parser.add_argument("number", help="Vehicle registration number or licence number")
    parser.add_argument("--dob", help="Date of birth (YYYY-MM-DD), required for licence lookups")
    parser.add_argument("--request-id", help="Correlation id (default: random)")
    parser.add_argument("--json-events", action="store_true", help="Print upstream attempt events to stderr")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.kind == "licence" and not args.dob:
        parser.error("--dob is required for licence lookups")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    request_id = args.request_id or uuid.uuid4().hex
    config = UlipConfig.from_env()
    on_event = _print_event if args.json_events else None

    async with UlipClient(config, on_upstream_event=on_event) as client:
        try:
            record = await _lookup(client, args, request_id)
        except UlipError as exc:
            status, body = error_response(exc, request_id)
            print(json.dumps({"status": status, **body}, indent=2, ensure_ascii=False))
            return 1

    print(json.dumps(record.model_dump(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
