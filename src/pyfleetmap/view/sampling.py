"""Spatial sampling for map rendering.

Two independent decimation policies run over the same selected readings:

* markers keep every k-th reading by index, across all sensors, so marker
  density follows reading density;
* paths are built per sensor in chronological order and always end on the
  sensor's most recent point.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import tzinfo

from pydantic import BaseModel, ConfigDict

from pyfleetmap._constants import (
    MARKER_DEFAULT_RATE,
    MARKER_SAMPLE_RATES,
    PATH_DEFAULT_RATE,
    PATH_MIN_POINTS,
    PATH_SAMPLE_RATES,
    sample_rate,
)
from pyfleetmap.directory import SensorDirectory
from pyfleetmap.models.reading import ParsedReading
from pyfleetmap.view.details import popup_lines
from pyfleetmap.view.filters import sort_key


class PathSegment(BaseModel):
    """Decimated chronological path of one sensor."""

    model_config = ConfigDict(frozen=True)

    sensor_id: str
    positions: tuple[tuple[float, float], ...]
    color: str


class Marker(BaseModel):
    """A renderable marker for one sampled reading."""

    model_config = ConfigDict(frozen=True)

    reading_id: str
    sensor_id: str
    latitude: float
    longitude: float
    title: str
    popup: tuple[tuple[str, str], ...]


def marker_sample_rate(count: int) -> int:
    return sample_rate(count, MARKER_SAMPLE_RATES, MARKER_DEFAULT_RATE)


def path_sample_rate(count: int) -> int:
    return sample_rate(count, PATH_SAMPLE_RATES, PATH_DEFAULT_RATE)


def sample_markers(readings: Sequence[ParsedReading]) -> list[ParsedReading]:
    """Keep readings whose index is a multiple of the marker sample rate."""
    rate = marker_sample_rate(len(readings))
    return [reading for index, reading in enumerate(readings) if index % rate == 0]


def group_by_sensor(readings: Sequence[ParsedReading]) -> dict[str, list[ParsedReading]]:
    """Group readings by sensor id, in order of first appearance."""
    groups: dict[str, list[ParsedReading]] = {}
    for reading in readings:
        groups.setdefault(reading.sensor_id, []).append(reading)
    return groups


def sample_paths(
    readings: Sequence[ParsedReading],
    directory: SensorDirectory,
    *,
    enabled: bool = True,
    tz: tzinfo | None = None,
) -> list[PathSegment]:
    """Build one decimated path per sensor with at least two positions.

    A reading is kept when its index within the sensor's chronological
    sequence is a multiple of the path sample rate, or when it is the last
    one.
    """
    if not enabled:
        return []

    segments: list[PathSegment] = []
    for sensor_id, group in group_by_sensor(readings).items():
        points = sorted((r for r in group if r.parsed.has_position), key=lambda r: sort_key(r, tz))
        if len(points) < PATH_MIN_POINTS:
            continue
        rate = path_sample_rate(len(points))
        last = len(points) - 1
        positions = tuple(
            (r.parsed.latitude, r.parsed.longitude)
            for index, r in enumerate(points)
            if index % rate == 0 or index == last
        )
        segments.append(PathSegment(sensor_id=sensor_id, positions=positions, color=directory.color_of(sensor_id)))
    return segments


def build_markers(
    readings: Sequence[ParsedReading],
    directory: SensorDirectory,
    *,
    tz: tzinfo | None = None,
) -> list[Marker]:
    """Sample *readings* and turn every positioned sample into a :class:`Marker`."""
    markers: list[Marker] = []
    for reading in sample_markers(readings):
        lat, lng = reading.parsed.latitude, reading.parsed.longitude
        if lat is None or lng is None:
            continue
        markers.append(
            Marker(
                reading_id=reading.id,
                sensor_id=reading.sensor_id,
                latitude=lat,
                longitude=lng,
                title=directory.name_of(reading.sensor_id),
                popup=tuple(popup_lines(reading, tz=tz)),
            )
        )
    return markers
