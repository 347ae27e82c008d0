"""Session token state for authenticated ULIP calls."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

from pyulip._constants import DEFAULT_TOKEN_TTL


class AccessToken(BaseModel):
    """Bearer token obtained from the ULIP login endpoint.

    Parameters
    ----------
    token : str
        Opaque bearer token.
    created_at : float
        Monotonic timestamp (``time.monotonic()``) of the login that
        produced the token.  Defaults to *now* if not provided.
    ttl : float
        Seconds the token is reused before a new login is required.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    token: str = Field(min_length=1)
    created_at: float = Field(default_factory=time.monotonic)
    ttl: float = DEFAULT_TOKEN_TTL

    def expired_at(self, now: float) -> bool:
        """Whether the token has reached its TTL at monotonic time *now*."""
        return (now - self.created_at) >= self.ttl
