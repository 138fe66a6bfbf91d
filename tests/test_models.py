from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from pyfleetmap.models import FilterCriteria, SensorReading, SensorSummary, parse_epoch

SUMMARY = {
    "totalReadings": 3,
    "uniqueSensorIds": ["sensor-a", "sensor-b"],
    "dateRange": {"min": "2024-05-01T08:00:00Z", "max": "2024-05-03T18:30:00Z"},
    "readingsBySensor": {"sensor-a": 2, "sensor-b": 1},
}


def test_sensor_reading_accepts_camel_case_document() -> None:
    reading = SensorReading.model_validate(
        {
            "id": "r1",
            "timestamp": "2024-05-01T10:15:00Z",
            "sensorId": "sensor-a",
            "locationLat": "26.85",
            "locationLong": 80.94,
            "ignitionStatus": "ON",
            "isOverSpeed": "false",
            "odometerKm": "--",
        }
    )

    assert reading.sensor_id == "sensor-a"
    assert reading.timestamp == datetime(2024, 5, 1, 10, 15, tzinfo=UTC)
    assert reading.location_lat == 26.85
    assert reading.is_over_speed is False
    assert reading.odometer_km is None
    assert reading.processed is False


def test_sensor_reading_populates_by_field_name() -> None:
    reading = SensorReading(id="r1", timestamp=datetime(2024, 5, 1, tzinfo=UTC), sensor_id="s")
    assert reading.sensor_id == "s"


def test_sensor_reading_placeholders_use_defaults() -> None:
    reading = SensorReading.model_validate(
        {
            "id": "r1",
            "timestamp": "2024-05-01T10:15:00Z",
            "sensorId": "s",
            "speed": float("nan"),
            "topic": "",
            "address": None,
        }
    )
    assert reading.speed is None
    assert reading.topic is None
    assert reading.address is None


def test_sensor_reading_requires_identity() -> None:
    with pytest.raises(ValidationError):
        SensorReading.model_validate({"timestamp": "2024-05-01T10:15:00Z", "sensorId": "s"})


def test_sensor_reading_is_frozen() -> None:
    reading = SensorReading(id="r1", timestamp=datetime(2024, 5, 1, tzinfo=UTC), sensor_id="s")
    with pytest.raises(ValidationError):
        reading.speed = 10.0  # type: ignore[misc]


def test_sensor_reading_non_mapping_raw_is_dropped() -> None:
    reading = SensorReading.model_validate(
        {"id": "r1", "timestamp": "2024-05-01T10:15:00Z", "sensorId": "s", "raw": "oops"}
    )
    assert reading.raw is None
    assert reading.reported is None


def test_parse_epoch_seconds_and_milliseconds() -> None:
    expected = datetime.fromtimestamp(1_714_558_500, tz=UTC)
    assert parse_epoch(1_714_558_500) == expected
    assert parse_epoch(1_714_558_500_000) == expected
    assert parse_epoch("2024-05-01") == "2024-05-01"


def test_summary_document() -> None:
    summary = SensorSummary.model_validate(SUMMARY)

    assert summary.total_readings == 3
    assert summary.unique_sensor_ids == ["sensor-a", "sensor-b"]
    assert summary.date_range.max == datetime(2024, 5, 3, 18, 30, tzinfo=UTC)
    assert summary.count_for("sensor-a") == 2
    assert summary.count_for("missing") == 0


def test_summary_default_criteria_covers_everything() -> None:
    criteria = SensorSummary.model_validate(SUMMARY).default_criteria()

    assert criteria.sensor_ids == frozenset({"sensor-a", "sensor-b"})
    assert criteria.start_date == datetime(2024, 5, 1, 8, tzinfo=UTC)
    assert criteria.end_date == datetime(2024, 5, 3, 18, 30, tzinfo=UTC)


def test_filter_criteria_equal_by_value_and_hashable() -> None:
    a = FilterCriteria(sensor_ids=["x", "y"], start_date=date(2024, 5, 1))
    b = FilterCriteria(sensor_ids=("y", "x"), start_date=date(2024, 5, 1))

    assert a == b
    assert hash(a) == hash(b)


def test_filter_criteria_updates_return_new_values() -> None:
    base = FilterCriteria(sensor_ids={"x"})

    toggled = base.with_sensor_toggled("y")
    assert toggled.sensor_ids == frozenset({"x", "y"})
    assert toggled.with_sensor_toggled("x").sensor_ids == frozenset({"y"})
    assert base.sensor_ids == frozenset({"x"})

    assert base.without_sensors().sensor_ids == frozenset()
    assert base.with_sensors(["z"]).sensor_ids == frozenset({"z"})

    dated = base.with_dates(date(2024, 5, 1), date(2024, 5, 2))
    assert (dated.start_date, dated.end_date) == (date(2024, 5, 1), date(2024, 5, 2))


def test_filter_criteria_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        FilterCriteria(sensors=["x"])  # type: ignore[call-arg]
