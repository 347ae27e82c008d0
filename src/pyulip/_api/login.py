"""Login endpoint.

Endpoint:
  - ``<base_url>/user/login`` (or the configured login URL)
"""

from __future__ import annotations

import logging
from typing import Any

from pyulip._api._envelope import error_flag_set
from pyulip._constants import TOKEN_FIELDS
from pyulip._redact import redact_for_log
from pyulip.config import UlipConfig
from pyulip.exceptions import UpstreamBadResponseError, UpstreamRejectedError

_logger = logging.getLogger(__name__)


def build_login_request(config: UlipConfig) -> dict[str, str]:
    """Build the JSON body for the login endpoint."""
    return {
        "username": config.username,
        "password": config.password,
    }


def parse_login_response(response: Any, *, login_url: str = "") -> str:
    """Extract the bearer token from a login response.

    ULIP deployments disagree on where the token lives, so ``response.id``
    is tried first, then the top-level fields in :data:`TOKEN_FIELDS`.

    Raises
    ------
    UpstreamRejectedError
        If the envelope error flag is set.
    UpstreamBadResponseError
        If no string token can be found.
    """
    _logger.debug("ULIP login response parsed=%s", redact_for_log(response))
    if not isinstance(response, dict):
        raise UpstreamBadResponseError("ULIP login returned unexpected response", path=login_url)

    if error_flag_set(response.get("error")):
        raise UpstreamRejectedError(
            f"ULIP login failed: code={response.get('code', '')} message={response.get('message', '')}",
            path=login_url,
        )

    candidates: list[Any] = []
    nested = response.get("response")
    if isinstance(nested, dict):
        candidates.append(nested.get("id"))
    candidates.extend(response.get(field) for field in TOKEN_FIELDS)

    for token in candidates:
        if isinstance(token, str) and token.strip():
            return token.strip()

    raise UpstreamBadResponseError("ULIP login returned unexpected response", path=login_url)
