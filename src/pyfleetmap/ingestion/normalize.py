"""Normalization helpers.

Centralizes defensive parsing and placeholder handling.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def safe_bool(value: Any) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    return None


def finite_number(value: Any) -> int | float | None:
    """Return *value* unchanged when it is a finite JSON number.

    Strings and bools are not numbers here: payload keys are typed by the
    device protocol, so a string where a number belongs counts as absent.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def whole_number(value: Any) -> int | None:
    """Return *value* as ``int`` when it is a finite integral number."""
    number = finite_number(value)
    if number is None:
        return None
    if isinstance(number, float):
        if not number.is_integer():
            return None
        return int(number)
    return number


def split_latlng(value: Any) -> tuple[float, float] | None:
    """Parse a ``"lat,lng"`` string into two finite floats.

    Only the first two comma-separated parts are considered. Empty parts,
    unparseable parts and non-finite values yield ``None``.
    """
    if not isinstance(value, str) or not value:
        return None
    parts = value.split(",")
    if len(parts) < 2:
        return None
    lat = _parse_part(parts[0])
    lng = _parse_part(parts[1])
    if lat is None or lng is None:
        return None
    return lat, lng


def _parse_part(text: str) -> float | None:
    stripped = text.strip()
    if not stripped:
        return None
    try:
        result = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(result):
        return None
    return result


def reported_state(raw: Any) -> Mapping[str, Any] | None:
    """Return ``raw["state"]["reported"]`` when every level is a mapping."""
    if not isinstance(raw, Mapping):
        return None
    state = raw.get("state")
    if not isinstance(state, Mapping):
        return None
    reported = state.get("reported")
    if not isinstance(reported, Mapping):
        return None
    return reported
