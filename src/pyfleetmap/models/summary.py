"""Summary document model and filter criteria."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyfleetmap.models._base import FleetBaseModel, FleetTimestamp

if TYPE_CHECKING:
    from datetime import tzinfo

    from pyfleetmap.models.reading import ParsedReading, SensorReading


class DateRange(FleetBaseModel):
    """Inclusive ``[min, max]`` bounds of the readings document."""

    min: FleetTimestamp
    max: FleetTimestamp


class FilterCriteria(BaseModel):
    """Sensor and calendar-date selection applied to the readings.

    Frozen and hashable so view caches can key on it by value. An empty
    ``sensor_ids`` set selects every sensor. ``start_date`` and ``end_date``
    are inclusive and compared by calendar day only.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sensor_ids: frozenset[str] = Field(default_factory=frozenset)
    start_date: datetime | date | None = None
    end_date: datetime | date | None = None

    @field_validator("sensor_ids", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset({value})
        return frozenset(str(item) for item in value)

    def with_sensor_toggled(self, sensor_id: str) -> FilterCriteria:
        if sensor_id in self.sensor_ids:
            return self.model_copy(update={"sensor_ids": self.sensor_ids - {sensor_id}})
        return self.model_copy(update={"sensor_ids": self.sensor_ids | {sensor_id}})

    def with_sensors(self, sensor_ids: Iterable[str]) -> FilterCriteria:
        return self.model_copy(update={"sensor_ids": frozenset(sensor_ids)})

    def without_sensors(self) -> FilterCriteria:
        return self.model_copy(update={"sensor_ids": frozenset()})

    def with_dates(self, start_date: date | None, end_date: date | None) -> FilterCriteria:
        return self.model_copy(update={"start_date": start_date, "end_date": end_date})

    def apply(self, readings: Iterable[SensorReading], *, tz: tzinfo | None = None) -> list[ParsedReading]:
        """Select and order *readings* under these criteria."""
        from pyfleetmap.view.filters import select_readings

        return select_readings(
            readings,
            self.sensor_ids,
            self.start_date,
            self.end_date,
            tz=tz,
        )


class SensorSummary(FleetBaseModel):
    """Precomputed summary of the readings document.

    Parameters
    ----------
    total_readings : int
        Number of records in the readings document.
    unique_sensor_ids : list[str]
        Sensor identifiers present, in document order.
    date_range : DateRange
        Earliest and latest reading timestamps.
    readings_by_sensor : dict[str, int]
        Record count per sensor identifier.
    """

    total_readings: int = 0
    unique_sensor_ids: list[str] = Field(default_factory=list)
    date_range: DateRange
    readings_by_sensor: dict[str, int] = Field(default_factory=dict)

    def count_for(self, sensor_id: str) -> int:
        return self.readings_by_sensor.get(sensor_id, 0)

    def default_criteria(self) -> FilterCriteria:
        """All sensors over the full available date range."""
        return FilterCriteria(
            sensor_ids=frozenset(self.unique_sensor_ids),
            start_date=self.date_range.min,
            end_date=self.date_range.max,
        )
