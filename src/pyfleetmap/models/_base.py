"""Base model for telemetry documents.

Every document model inherits from :class:`FleetBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase document keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that strips placeholder
  values (``""``, ``"--"``, NaN) so the field default is used.
* ``frozen=True``: records are created once and never patched.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# Placeholder strings the device backend uses for "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan"})

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def parse_epoch(value: Any) -> Any:
    """Convert an epoch number (seconds **or** milliseconds) to a UTC datetime.

    Anything that is not a plain number is returned unchanged so pydantic
    can parse ISO-8601 strings itself.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    ts = float(value)
    if ts >= _MS_THRESHOLD:
        ts /= 1000.0
    return datetime.fromtimestamp(ts, tz=UTC)


FleetTimestamp = Annotated[datetime, BeforeValidator(parse_epoch)]
"""Annotated type accepting ISO-8601 strings or epoch numbers (s or ms)."""


class FleetBaseModel(BaseModel):
    """Base for telemetry document models.

    Handles:
    * camelCase → snake_case via ``alias_generator=to_camel``
    * placeholder values (``""``, ``"--"``, NaN) → dropped so
      the field default is used instead
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        """Strip placeholder values from the top level of *values*."""
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_placeholder_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return FleetBaseModel._clean_dict(values)
