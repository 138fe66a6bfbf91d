"""Reading selection.

Selection normalizes every reading, keeps those matching the sensor and
calendar-date criteria that have a resolved position, and orders them by
timestamp. Sorting is stable so readings sharing an instant keep their
document order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from pyfleetmap.ingestion.readings import normalize_reading
from pyfleetmap.models.reading import ParsedReading, SensorReading

_logger = logging.getLogger(__name__)


def localize(value: datetime, tz: tzinfo | None = None) -> datetime:
    """Return *value* as an aware datetime in *tz* (process local when ``None``).

    Naive values are taken as wall-clock time in that zone.
    """
    if value.tzinfo is None:
        if tz is None:
            return value.astimezone()
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def calendar_date(value: date, tz: tzinfo | None = None) -> date:
    """Calendar day of *value* as seen in *tz*; plain dates pass through."""
    if isinstance(value, datetime):
        return localize(value, tz).date()
    return value


def sort_key(reading: SensorReading, tz: tzinfo | None = None) -> float:
    """Instant of *reading*; naive timestamps are wall time in *tz*."""
    return localize(reading.timestamp, tz).timestamp()


def select_readings(
    readings: Iterable[SensorReading],
    sensor_ids: Iterable[str] = (),
    start_date: date | None = None,
    end_date: date | None = None,
    *,
    tz: tzinfo | None = None,
) -> list[ParsedReading]:
    """Select positioned readings matching the criteria, oldest first.

    Parameters
    ----------
    readings
        Canonical (or already parsed) readings in document order.
    sensor_ids
        Sensors to keep; empty keeps every sensor.
    start_date, end_date
        Inclusive calendar-day bounds. Datetimes are reduced to their
        calendar day in *tz*; time of day is ignored.
    tz
        Zone the calendar is read in. ``None`` uses the process local zone.
    """
    wanted = frozenset(sensor_ids)
    start_day = calendar_date(start_date, tz) if start_date is not None else None
    end_day = calendar_date(end_date, tz) if end_date is not None else None

    selected: list[ParsedReading] = []
    for reading in readings:
        if wanted and reading.sensor_id not in wanted:
            continue
        if start_day is not None or end_day is not None:
            day = calendar_date(reading.timestamp, tz)
            if start_day is not None and day < start_day:
                continue
            if end_day is not None and day > end_day:
                continue
        parsed = normalize_reading(reading)
        if not parsed.parsed.has_position:
            continue
        selected.append(parsed)

    selected.sort(key=lambda reading: sort_key(reading, tz))
    _logger.debug("Selected %d readings (sensors=%d, start=%s, end=%s)", len(selected), len(wanted), start_day, end_day)
    return selected
