"""Sensor reading models.

A :class:`SensorReading` is one telemetry event exactly as the readings
document carries it. A :class:`ParsedReading` is the same event with its
precedence-resolved measurement set attached as ``parsed``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator

from pyfleetmap.ingestion.normalize import reported_state, safe_bool, safe_float, safe_str
from pyfleetmap.models._base import FleetBaseModel, FleetTimestamp


class SensorReading(FleetBaseModel):
    """One telemetry event as received.

    Parameters
    ----------
    id : str
        Unique reading identifier.
    timestamp : datetime
        Event instant.
    fuel_level : float or None
        Fuel level as reported by the backend.
    location_lat, location_long : float or None
        Top-level coordinates.
    sensor_id : str
        Tracking device identifier.
    device_voltage : float or None
        Device supply voltage in volts.
    ignition_status : str or None
        ``"ON"``, ``"OFF"`` or ``None`` when unknown.
    speed : float or None
        Speed in km/h.
    created_at : datetime or None
        Ingestion instant.
    raw : dict or None
        Multiplexed device payload, ``{"state": {"reported": {...}}}``.
    topic, address : str or None
        Transport metadata.
    is_over_speed : bool or None
        Over-speed flag.
    odometer_km : float or None
        Odometer in kilometres.
    processed : bool
        Backend processing flag.
    """

    id: str
    timestamp: FleetTimestamp
    fuel_level: float | None = None
    location_lat: float | None = None
    location_long: float | None = None
    sensor_id: str
    device_voltage: float | None = None
    ignition_status: str | None = None
    speed: float | None = None
    created_at: FleetTimestamp | None = None
    raw: dict[str, Any] | None = None
    topic: str | None = None
    address: str | None = None
    is_over_speed: bool | None = None
    odometer_km: float | None = None
    processed: bool = False

    @field_validator(
        "fuel_level",
        "location_lat",
        "location_long",
        "device_voltage",
        "speed",
        "odometer_km",
        mode="before",
    )
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("id", "sensor_id", "ignition_status", "topic", "address", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("is_over_speed", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool | None:
        return safe_bool(value)

    @field_validator("processed", mode="before")
    @classmethod
    def _coerce_processed(cls, value: Any) -> bool:
        return bool(safe_bool(value))

    @field_validator("raw", mode="before")
    @classmethod
    def _coerce_raw(cls, value: Any) -> dict[str, Any] | None:
        return dict(value) if isinstance(value, Mapping) else None

    @property
    def reported(self) -> Mapping[str, Any] | None:
        """The ``raw.state.reported`` mapping, or ``None`` when absent."""
        return reported_state(self.raw)

    def canonical_fields(self) -> dict[str, Any]:
        """Return the received fields only, keyed by field name."""
        return {name: getattr(self, name) for name in SensorReading.model_fields}


class ParsedFields(FleetBaseModel):
    """Measurement set resolved from a reading's overlapping sources.

    Every field is independently ``None`` when no source supplied it.
    """

    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    angle: float | None = None
    satellites: int | None = None
    odometer: float | None = Field(default=None, description="Kilometres")
    speed: float | None = Field(default=None, description="km/h")
    ignition: bool | None = None
    event_code: int | None = None
    device_voltage: float | None = Field(default=None, description="Volts")
    timestamp_raw: int | None = Field(default=None, description="Device clock, epoch ms")

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class ParsedReading(SensorReading):
    """A :class:`SensorReading` with its resolved measurement set."""

    parsed: ParsedFields
