"""Data models for the telemetry documents."""

from pyfleetmap.models._base import FleetBaseModel, FleetTimestamp, parse_epoch
from pyfleetmap.models.reading import ParsedFields, ParsedReading, SensorReading
from pyfleetmap.models.summary import DateRange, FilterCriteria, SensorSummary

__all__ = [
    "DateRange",
    "FilterCriteria",
    "FleetBaseModel",
    "FleetTimestamp",
    "ParsedFields",
    "ParsedReading",
    "SensorReading",
    "SensorSummary",
    "parse_epoch",
]
