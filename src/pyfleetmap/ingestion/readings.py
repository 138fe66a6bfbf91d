"""Reading normalization.

Attaches the resolved measurement set to a canonical reading. The result is
always derived from the canonical fields, so normalizing a
:class:`ParsedReading` again discards the previous ``parsed`` block and
recomputes an equal one.
"""

from __future__ import annotations

from collections.abc import Iterable

from pyfleetmap.ingestion.resolver import resolve_fields
from pyfleetmap.models.reading import ParsedReading, SensorReading


def normalize_reading(reading: SensorReading) -> ParsedReading:
    canonical = reading.canonical_fields()
    return ParsedReading.model_construct(**canonical, parsed=resolve_fields(reading))


def normalize_readings(readings: Iterable[SensorReading]) -> list[ParsedReading]:
    return [normalize_reading(reading) for reading in readings]
