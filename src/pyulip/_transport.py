"""HTTP transport for ULIP JSON POST calls."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyulip._constants import USER_AGENT
from pyulip.exceptions import (
    UpstreamBadResponseError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the orchestrator and login.

    Implementations raise :class:`UpstreamTimeoutError` when the deadline is
    exceeded, :class:`UpstreamUnavailableError` for error statuses and
    connection failures, and :class:`UpstreamBadResponseError` when the body
    is not JSON.
    """

    async def post_json(
        self,
        url: str,
        body: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float,
    ) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed transport; one deadline per request."""

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def post_json(
        self,
        url: str,
        body: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float,
    ) -> Any:
        request_headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json",
            "user-agent": USER_AGENT,
        }
        if headers:
            request_headers.update(headers)

        _logger.debug("POST %s", url)

        try:
            async with self._http.post(
                url,
                data=json.dumps(body),
                headers=request_headers,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                raw = await resp.read()
                if resp.status >= 400:
                    raise UpstreamUnavailableError(
                        f"HTTP {resp.status} from {url}: {raw[:200].decode('utf-8', errors='replace')}",
                        upstream_status=resp.status,
                        path=url,
                    )
        except UpstreamUnavailableError:
            raise
        except (asyncio.TimeoutError, aiohttp.ServerTimeoutError) as exc:
            raise UpstreamTimeoutError(f"Request to {url} timed out after {timeout}s", path=url) from exc
        except aiohttp.ClientError as exc:
            raise UpstreamUnavailableError(f"Request to {url} failed: {exc}", path=url) from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise UpstreamBadResponseError(f"Response from {url} is not valid UTF-8", path=url) from exc
        except json.JSONDecodeError as exc:
            raise UpstreamBadResponseError(f"Invalid JSON from {url}: {raw[:200]!r}", path=url) from exc
