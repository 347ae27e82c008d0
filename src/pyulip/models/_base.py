"""Base model and field types for normalized ULIP records.

Every record model inherits from :class:`UlipBaseModel`, which drops
missing values (``None``, blank strings, empty containers) before
validation.  Fields list their upstream spellings with ``AliasChoices``
in priority order, so once placeholders are gone the first present,
non-null candidate wins.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator

from pyulip.ingestion.normalize import (
    is_meaningful,
    normalize_date,
    normalize_string,
    reorder_dmy_date,
)

Text = Annotated[str | None, BeforeValidator(normalize_string)]
"""Trimmed string; numbers are stringified, blanks and objects become ``None``."""

IsoDate = Annotated[str | None, BeforeValidator(normalize_date)]
"""Date rendered as ``YYYY-MM-DD`` when recognised, trimmed text otherwise."""

DmyDate = Annotated[str | None, BeforeValidator(reorder_dmy_date)]
"""``DD-MM-YYYY`` reordered to ``YYYY-MM-DD``; other values passed through."""


class UlipBaseModel(BaseModel):
    """Base for normalized output records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_missing(cls, values: Any) -> Any:
        """Remove placeholder values so alias resolution skips them."""
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if is_meaningful(value)}

    @classmethod
    def field_aliases(cls) -> dict[str, tuple[str, ...]]:
        """Upstream key candidates per field, in priority order."""
        table: dict[str, tuple[str, ...]] = {}
        for name, info in cls.model_fields.items():
            alias = info.validation_alias
            choices = getattr(alias, "choices", None)
            if choices is None:
                table[name] = (alias,) if isinstance(alias, str) else (name,)
            else:
                table[name] = tuple(str(choice) for choice in choices)
        return table
