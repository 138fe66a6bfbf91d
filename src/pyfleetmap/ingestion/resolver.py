"""Field resolution for multiplexed device payloads.

Tracking firmware reports the same physical quantity under several
protocol keys, and different firmware revisions omit different keys. The
resolution policy lives in :data:`FIELD_CHAINS`: for every derived field an
ordered list of :class:`Candidate` sources, evaluated top to bottom. The
first candidate whose predicate accepts the reading supplies the value.

Resolution is total. A malformed payload value only makes its candidate
inapplicable; it never raises.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pyfleetmap._constants import (
    IGNITION_ON_TOKEN,
    KEY_ALTITUDE,
    KEY_ANGLE,
    KEY_EVENT,
    KEY_IGNITION,
    KEY_LATLNG,
    KEY_ODOMETER,
    KEY_ODOMETER_METERS,
    KEY_SATELLITES,
    KEY_SPEED,
    KEY_SPEED_ALT,
    KEY_TIMESTAMP,
    KEY_VOLTAGE_MV,
)
from pyfleetmap.ingestion.normalize import finite_number, split_latlng, whole_number
from pyfleetmap.models.reading import ParsedFields, SensorReading


@dataclass(frozen=True, slots=True)
class Source:
    """What a candidate may look at: the reading and its reported payload."""

    reading: SensorReading
    reported: Mapping[str, Any] | None

    def payload(self, key: str) -> Any:
        if self.reported is None:
            return None
        return self.reported.get(key)


@dataclass(frozen=True, slots=True)
class Candidate:
    """One entry of a precedence chain."""

    name: str
    applies: Callable[[Source], bool]
    extract: Callable[[Source], Any]


# ------------------------------------------------------------------
# Candidate builders
# ------------------------------------------------------------------


def _payload_number(key: str, *, scale: float = 1.0, skip_zero: bool = False) -> Candidate:
    def applies(src: Source) -> bool:
        value = finite_number(src.payload(key))
        if value is None:
            return False
        return not (skip_zero and value == 0)

    def extract(src: Source) -> float:
        value = finite_number(src.payload(key))
        assert value is not None  # noqa: S101
        return value / scale if scale != 1.0 else float(value)

    label = f"payload[{key!r}]" if scale == 1.0 else f"payload[{key!r}] / {scale:g}"
    return Candidate(label, applies, extract)


def _payload_whole(key: str) -> Candidate:
    return Candidate(
        f"payload[{key!r}]",
        lambda src: whole_number(src.payload(key)) is not None,
        lambda src: whole_number(src.payload(key)),
    )


def _payload_latlng(index: int) -> Candidate:
    def extract(src: Source) -> float:
        pair = split_latlng(src.payload(KEY_LATLNG))
        assert pair is not None  # noqa: S101
        return pair[index]

    return Candidate(
        f"payload[{KEY_LATLNG!r}][{index}]",
        lambda src: split_latlng(src.payload(KEY_LATLNG)) is not None,
        extract,
    )


def _payload_flag(key: str) -> Candidate:
    # Exactly 1 or 0; bools and other codes fall through.
    def applies(src: Source) -> bool:
        value = whole_number(src.payload(key))
        return value in (0, 1)

    return Candidate(
        f"payload[{key!r}] in (0, 1)",
        applies,
        lambda src: whole_number(src.payload(key)) == 1,
    )


def _record(attr: str) -> Candidate:
    return Candidate(
        f"reading.{attr}",
        lambda src: getattr(src.reading, attr) is not None,
        lambda src: getattr(src.reading, attr),
    )


def _record_ignition() -> Candidate:
    return Candidate(
        f"reading.ignition_status == {IGNITION_ON_TOKEN!r}",
        lambda src: src.reading.ignition_status is not None,
        lambda src: src.reading.ignition_status == IGNITION_ON_TOKEN,
    )


FIELD_CHAINS: dict[str, tuple[Candidate, ...]] = {
    "latitude": (_payload_latlng(0), _record("location_lat")),
    "longitude": (_payload_latlng(1), _record("location_long")),
    "altitude": (_payload_number(KEY_ALTITUDE),),
    "angle": (_payload_number(KEY_ANGLE),),
    "satellites": (_payload_whole(KEY_SATELLITES),),
    "odometer": (
        _payload_number(KEY_ODOMETER_METERS, scale=1000.0, skip_zero=True),
        _payload_number(KEY_ODOMETER),
        _record("odometer_km"),
    ),
    "speed": (
        _payload_number(KEY_SPEED),
        _payload_number(KEY_SPEED_ALT),
        _record("speed"),
    ),
    "ignition": (_payload_flag(KEY_IGNITION), _record_ignition()),
    "event_code": (_payload_whole(KEY_EVENT),),
    "device_voltage": (
        _payload_number(KEY_VOLTAGE_MV, scale=1000.0, skip_zero=True),
        _record("device_voltage"),
    ),
    "timestamp_raw": (_payload_whole(KEY_TIMESTAMP),),
}
"""Precedence chains per :class:`ParsedFields` attribute, highest priority first."""


def resolve_field(field: str, source: Source) -> Any:
    """Evaluate one chain; ``None`` when no candidate applies."""
    for candidate in FIELD_CHAINS[field]:
        if candidate.applies(source):
            return candidate.extract(source)
    return None


def winning_candidate(field: str, reading: SensorReading) -> str | None:
    """Name of the candidate that supplies *field* for *reading*.

    Diagnostic helper for inspecting which encoding a firmware revision
    actually populated.
    """
    source = Source(reading, reading.reported)
    for candidate in FIELD_CHAINS[field]:
        if candidate.applies(source):
            return candidate.name
    return None


def resolve_fields(reading: SensorReading) -> ParsedFields:
    """Resolve the full measurement set of *reading*."""
    source = Source(reading, reading.reported)
    return ParsedFields(**{field: resolve_field(field, source) for field in FIELD_CHAINS})
