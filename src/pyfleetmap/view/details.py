"""Display formatting for a single reading."""

from __future__ import annotations

import json
from datetime import datetime, tzinfo
from typing import Any

from pyfleetmap.directory import SensorDirectory
from pyfleetmap.models.reading import ParsedReading
from pyfleetmap.view.filters import localize

NOT_AVAILABLE = "N/A"


def format_value(value: Any) -> str:
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return f"{value:.2f}"
    return str(value)


def format_time(value: datetime | None, tz: tzinfo | None = None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return localize(value, tz).strftime("%Y-%m-%d %H:%M:%S")


def format_ignition(value: bool | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return "ON" if value else "OFF"


def _yes_no(value: bool | None) -> str:
    return "Yes" if value else "No"


def _with_unit(value: Any, unit: str) -> str:
    text = format_value(value)
    return text if value is None else f"{text} {unit}"


def popup_lines(reading: ParsedReading, *, tz: tzinfo | None = None) -> list[tuple[str, str]]:
    """Short label/value list shown when a marker is opened.

    Speed and odometer are omitted when unknown.
    """
    parsed = reading.parsed
    lines = [("Time", format_time(reading.timestamp, tz))]
    if parsed.speed is not None:
        lines.append(("Speed", f"{parsed.speed:g} km/h"))
    if parsed.odometer is not None:
        lines.append(("Odometer", f"{parsed.odometer:.2f} km"))
    lines.append(("Ignition", format_ignition(parsed.ignition)))
    return lines


def reading_details(
    reading: ParsedReading,
    directory: SensorDirectory,
    *,
    tz: tzinfo | None = None,
) -> dict[str, dict[str, str]]:
    """Full details of one reading, grouped into titled sections."""
    parsed = reading.parsed
    sections: dict[str, dict[str, str]] = {
        "Basic Information": {
            "Sensor/Bus": directory.name_of(reading.sensor_id),
            "Timestamp": format_time(reading.timestamp, tz),
            "Created At": format_time(reading.created_at, tz),
            "Topic": reading.topic or NOT_AVAILABLE,
        },
        "Location Data": {
            "Latitude": format_value(parsed.latitude),
            "Longitude": format_value(parsed.longitude),
            "Altitude": _with_unit(parsed.altitude, "m"),
            "Angle/Bearing": _with_unit(parsed.angle, "°"),
            "Satellites": format_value(parsed.satellites),
        },
        "Vehicle Data": {
            "Speed": _with_unit(parsed.speed, "km/h"),
            "Odometer": _with_unit(parsed.odometer, "km"),
            "Ignition": format_ignition(parsed.ignition),
            "Fuel Level": format_value(reading.fuel_level),
            "Over Speed": _yes_no(reading.is_over_speed),
        },
        "Device Data": {
            "Device Voltage": _with_unit(parsed.device_voltage, "V"),
            "Event Code": format_value(parsed.event_code),
            "Processed": _yes_no(reading.processed),
        },
    }
    if reading.raw is not None:
        reported = reading.reported or {}
        sections["Raw Data Fields"] = {"reported": json.dumps(dict(reported), indent=2, default=str)}
    return sections
