"""Fleet view: the pipeline bound to one loaded dataset.

The host application calls these methods whenever the filter criteria or
the path toggle change. Each stage remembers its last input key and result,
compared by value, so asking again with equal criteria returns the cached
result without recomputation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from datetime import tzinfo
from typing import Generic, TypeVar

from pyfleetmap.directory import SensorDirectory
from pyfleetmap.models.reading import ParsedReading, SensorReading
from pyfleetmap.models.summary import FilterCriteria, SensorSummary
from pyfleetmap.view.bounds import MapBounds, compute_bounds
from pyfleetmap.view.filters import select_readings
from pyfleetmap.view.sampling import Marker, PathSegment, build_markers, sample_paths

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _LastValue(Generic[T]):
    """Single-entry memo keyed by structural equality."""

    name: str
    key: Hashable | None = None
    value: T | None = None
    filled: bool = False

    def get(self, key: Hashable, compute: Callable[[], T]) -> T:
        if self.filled and self.key == key:
            return self.value  # type: ignore[return-value]
        _logger.debug("Recomputing %s", self.name)
        value = compute()
        self.key = key
        self.value = value
        self.filled = True
        return value

    def clear(self) -> None:
        self.key = None
        self.value = None
        self.filled = False


class FleetView:
    """Filtered readings, markers, paths and bounds for one dataset.

    Usage::

        view = FleetView(readings, summary, directory)
        criteria = view.default_criteria()
        markers = view.markers(criteria)
        paths = view.paths(criteria, show_path=True)
    """

    def __init__(
        self,
        readings: Iterable[SensorReading],
        summary: SensorSummary | None = None,
        directory: SensorDirectory | None = None,
        *,
        tz: tzinfo | None = None,
    ) -> None:
        self._readings: tuple[SensorReading, ...] = tuple(readings)
        self._summary = summary
        self._directory = directory or SensorDirectory()
        self._tz = tz
        self._filtered: _LastValue[tuple[ParsedReading, ...]] = _LastValue("filtered")
        self._markers: _LastValue[tuple[Marker, ...]] = _LastValue("markers")
        self._paths: _LastValue[tuple[PathSegment, ...]] = _LastValue("paths")
        self._bounds: _LastValue[MapBounds | None] = _LastValue("bounds")

    @property
    def readings(self) -> tuple[SensorReading, ...]:
        return self._readings

    @property
    def summary(self) -> SensorSummary | None:
        return self._summary

    @property
    def directory(self) -> SensorDirectory:
        return self._directory

    @property
    def tz(self) -> tzinfo | None:
        """Zone calendar dates and naive timestamps are read in."""
        return self._tz

    def default_criteria(self) -> FilterCriteria:
        if self._summary is not None:
            return self._summary.default_criteria()
        return FilterCriteria()

    def filtered(self, criteria: FilterCriteria) -> tuple[ParsedReading, ...]:
        return self._filtered.get(
            criteria,
            lambda: tuple(
                select_readings(
                    self._readings,
                    criteria.sensor_ids,
                    criteria.start_date,
                    criteria.end_date,
                    tz=self._tz,
                )
            ),
        )

    def markers(self, criteria: FilterCriteria) -> tuple[Marker, ...]:
        return self._markers.get(
            criteria,
            lambda: tuple(build_markers(self.filtered(criteria), self._directory, tz=self._tz)),
        )

    def paths(self, criteria: FilterCriteria, show_path: bool) -> tuple[PathSegment, ...]:
        return self._paths.get(
            (criteria, show_path),
            lambda: tuple(sample_paths(self.filtered(criteria), self._directory, enabled=show_path, tz=self._tz)),
        )

    def bounds(self, criteria: FilterCriteria) -> MapBounds | None:
        return self._bounds.get(criteria, lambda: compute_bounds(self.filtered(criteria)))

    def find(self, criteria: FilterCriteria, reading_id: str) -> ParsedReading | None:
        """Look up a selected reading by id (e.g. from a marker)."""
        for reading in self.filtered(criteria):
            if reading.id == reading_id:
                return reading
        return None

    def invalidate(self) -> None:
        for memo in (self._filtered, self._markers, self._paths, self._bounds):
            memo.clear()
