"""Tests for payload field resolution precedence."""

from __future__ import annotations

from typing import Any

import pytest

from pyfleetmap.ingestion.resolver import FIELD_CHAINS, resolve_fields, winning_candidate
from pyfleetmap.models.reading import ParsedFields, SensorReading


def _reading(reported: dict[str, Any] | None = None, **fields: Any) -> SensorReading:
    data: dict[str, Any] = {
        "id": "r-1",
        "timestamp": "2024-05-01T10:15:00Z",
        "sensorId": "sensor-a",
        **fields,
    }
    if reported is not None:
        data["raw"] = {"state": {"reported": reported}}
    return SensorReading.model_validate(data)


def test_every_parsed_field_has_a_chain() -> None:
    assert set(FIELD_CHAINS) == set(ParsedFields.model_fields)


# ------------------------------------------------------------------
# Position
# ------------------------------------------------------------------


class TestPosition:
    def test_latlng_wins_over_top_level(self) -> None:
        parsed = resolve_fields(_reading({"latlng": "26.8512,80.9461"}, locationLat=1.0, locationLong=2.0))
        assert parsed.latitude == pytest.approx(26.8512)
        assert parsed.longitude == pytest.approx(80.9461)

    def test_latlng_with_whitespace(self) -> None:
        parsed = resolve_fields(_reading({"latlng": " 26.85 , 80.94 "}))
        assert parsed.latitude == pytest.approx(26.85)
        assert parsed.longitude == pytest.approx(80.94)

    @pytest.mark.parametrize("latlng", ["abc,80.9", "26.8", "26.8,", ",80.9", "nan,80.9", "inf,1", "", 12.5])
    def test_malformed_latlng_falls_back(self, latlng: Any) -> None:
        parsed = resolve_fields(_reading({"latlng": latlng}, locationLat=1.5, locationLong=2.5))
        assert parsed.latitude == 1.5
        assert parsed.longitude == 2.5

    def test_latlng_uses_first_two_parts(self) -> None:
        parsed = resolve_fields(_reading({"latlng": "10.0,20.0,30.0"}))
        assert (parsed.latitude, parsed.longitude) == (10.0, 20.0)

    def test_missing_everywhere_is_none(self) -> None:
        parsed = resolve_fields(_reading({}))
        assert parsed.latitude is None
        assert parsed.longitude is None
        assert parsed.has_position is False


# ------------------------------------------------------------------
# Odometer / speed / voltage
# ------------------------------------------------------------------


class TestOdometer:
    def test_meters_key_wins_and_is_converted(self) -> None:
        parsed = resolve_fields(_reading({"16": 5000, "241": 12}, odometerKm=99.0))
        assert parsed.odometer == pytest.approx(5.0)

    def test_zero_meters_falls_through_to_secondary(self) -> None:
        parsed = resolve_fields(_reading({"16": 0, "241": 12}, odometerKm=99.0))
        assert parsed.odometer == 12.0

    def test_zero_meters_falls_through_to_record(self) -> None:
        parsed = resolve_fields(_reading({"16": 0}, odometerKm=99.0))
        assert parsed.odometer == 99.0

    def test_secondary_zero_is_a_value(self) -> None:
        parsed = resolve_fields(_reading({"241": 0}, odometerKm=99.0))
        assert parsed.odometer == 0.0

    def test_string_meters_is_absent(self) -> None:
        parsed = resolve_fields(_reading({"16": "5000"}, odometerKm=99.0))
        assert parsed.odometer == 99.0


class TestSpeed:
    def test_primary_zero_wins(self) -> None:
        parsed = resolve_fields(_reading({"21": 0, "sp": 40}, speed=50))
        assert parsed.speed == 0.0

    def test_secondary_key(self) -> None:
        parsed = resolve_fields(_reading({"sp": 40}, speed=50))
        assert parsed.speed == 40.0

    def test_record_fallback(self) -> None:
        parsed = resolve_fields(_reading({"21": None}, speed=50))
        assert parsed.speed == 50.0


class TestVoltage:
    def test_millivolts_converted(self) -> None:
        parsed = resolve_fields(_reading({"66": 12400}, deviceVoltage=11.0))
        assert parsed.device_voltage == pytest.approx(12.4)

    def test_zero_falls_through(self) -> None:
        parsed = resolve_fields(_reading({"66": 0}, deviceVoltage=11.0))
        assert parsed.device_voltage == 11.0


# ------------------------------------------------------------------
# Ignition
# ------------------------------------------------------------------


class TestIgnition:
    def test_payload_zero_beats_record_on(self) -> None:
        parsed = resolve_fields(_reading({"1": 0}, ignitionStatus="ON"))
        assert parsed.ignition is False

    def test_payload_one(self) -> None:
        parsed = resolve_fields(_reading({"1": 1}, ignitionStatus="OFF"))
        assert parsed.ignition is True

    @pytest.mark.parametrize("value", [2, -1, True, "1", 0.5])
    def test_other_payload_values_fall_through(self, value: Any) -> None:
        parsed = resolve_fields(_reading({"1": value}, ignitionStatus="ON"))
        assert parsed.ignition is True

    def test_record_token_is_case_sensitive(self) -> None:
        assert resolve_fields(_reading(ignitionStatus="on")).ignition is False
        assert resolve_fields(_reading(ignitionStatus="OFF")).ignition is False

    def test_unknown_when_nothing_reported(self) -> None:
        assert resolve_fields(_reading()).ignition is None


# ------------------------------------------------------------------
# Payload-only fields
# ------------------------------------------------------------------


class TestPayloadOnlyFields:
    def test_direct_keys(self) -> None:
        parsed = resolve_fields(
            _reading({"alt": 120, "ang": 270.5, "sat": 9, "evt": 0, "ts": 1714558500000}),
        )
        assert parsed.altitude == 120.0
        assert parsed.angle == 270.5
        assert parsed.satellites == 9
        assert parsed.event_code == 0
        assert parsed.timestamp_raw == 1714558500000

    def test_no_payload_leaves_them_null(self) -> None:
        parsed = resolve_fields(_reading(locationLat=1.0, locationLong=2.0))
        assert parsed.altitude is None
        assert parsed.angle is None
        assert parsed.satellites is None
        assert parsed.event_code is None
        assert parsed.timestamp_raw is None

    def test_non_integral_counts_are_absent(self) -> None:
        parsed = resolve_fields(_reading({"sat": 7.5, "evt": True, "alt": "high"}))
        assert parsed.satellites is None
        assert parsed.event_code is None
        assert parsed.altitude is None


# ------------------------------------------------------------------
# Whole-record behaviour
# ------------------------------------------------------------------


def test_without_payload_resolved_fields_equal_record_fields() -> None:
    reading = _reading(
        locationLat=26.85,
        locationLong=80.94,
        odometerKm=1234.5,
        speed=42,
        deviceVoltage=12.2,
        ignitionStatus="ON",
    )
    parsed = resolve_fields(reading)

    assert parsed.latitude == reading.location_lat
    assert parsed.longitude == reading.location_long
    assert parsed.odometer == reading.odometer_km
    assert parsed.speed == reading.speed
    assert parsed.device_voltage == reading.device_voltage
    assert parsed.ignition is True


@pytest.mark.parametrize("raw", [{"state": None}, {"state": {"reported": "garbage"}}, {"other": 1}])
def test_malformed_envelope_counts_as_no_payload(raw: dict[str, Any]) -> None:
    reading = SensorReading.model_validate(
        {
            "id": "r-2",
            "timestamp": "2024-05-01T10:15:00Z",
            "sensorId": "sensor-a",
            "locationLat": 3.0,
            "locationLong": 4.0,
            "raw": raw,
        }
    )
    parsed = resolve_fields(reading)
    assert (parsed.latitude, parsed.longitude) == (3.0, 4.0)


def test_winning_candidate_names_the_source() -> None:
    reading = _reading({"241": 12, "sp": 30}, odometerKm=1.0, speed=2.0)
    assert winning_candidate("odometer", reading) == "payload['241']"
    assert winning_candidate("speed", reading) == "payload['sp']"
    assert winning_candidate("altitude", reading) is None
    assert winning_candidate("latitude", _reading(locationLat=1.0)) == "reading.location_lat"
