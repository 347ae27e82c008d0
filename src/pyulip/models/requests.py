"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`pyulip.client.UlipClient` so bad
lookup parameters fail before any upstream call is made.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _LookupRequest(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )


class VehicleLookupRequest(_LookupRequest):
    """Registration or toll-tag lookup by vehicle number."""

    vehicle_number: str = Field(min_length=4, max_length=32)


class LicenceLookupRequest(_LookupRequest):
    """Driving licence lookup."""

    licence_number: str = Field(min_length=5, max_length=32)
    date_of_birth: str = Field(pattern=r"^\d{4}-(0[1-9]|1[012])-(0[1-9]|[12][0-9]|3[01])$")

    @field_validator("date_of_birth")
    @classmethod
    def _real_date(cls, value: str) -> str:
        date.fromisoformat(value)
        return value
