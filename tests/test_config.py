from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from pyfleetmap._constants import FALLBACK_COLOR, READINGS_TIMEOUT_S, SUMMARY_TIMEOUT_S
from pyfleetmap.config import FleetMapConfig
from pyfleetmap.exceptions import FleetMapConfigError

_ENV_KEYS = (
    "FLEETMAP_SUMMARY_URL",
    "FLEETMAP_READINGS_URL",
    "FLEETMAP_TIME_ZONE",
    "FLEETMAP_SENSORS_FILE",
    "FLEETMAP_FALLBACK_COLOR",
    "FLEETMAP_SUMMARY_TIMEOUT",
    "FLEETMAP_READINGS_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = FleetMapConfig.from_env()

    assert config.summary_url == ""
    assert config.readings_url == ""
    assert config.summary_timeout == SUMMARY_TIMEOUT_S
    assert config.readings_timeout == READINGS_TIMEOUT_S
    assert config.fallback_color == FALLBACK_COLOR
    assert config.zone() is None


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEETMAP_SUMMARY_URL", "https://example.test/summary.json")
    monkeypatch.setenv("FLEETMAP_READINGS_URL", "https://example.test/sensor-readings.json")
    monkeypatch.setenv("FLEETMAP_READINGS_TIMEOUT", "300")
    monkeypatch.setenv("FLEETMAP_SENSORS_FILE", "/etc/fleet/sensors.json")

    config = FleetMapConfig.from_env()

    assert config.summary_url == "https://example.test/summary.json"
    assert config.readings_url == "https://example.test/sensor-readings.json"
    assert config.readings_timeout == 300.0
    assert config.sensors_file == "/etc/fleet/sensors.json"


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEETMAP_SUMMARY_URL", "https://env.test/summary.json")
    monkeypatch.setenv("FLEETMAP_SUMMARY_TIMEOUT", "not-a-number")

    config = FleetMapConfig.from_env(summary_url="https://arg.test/summary.json", summary_timeout=5.0)

    assert config.summary_url == "https://arg.test/summary.json"
    assert config.summary_timeout == 5.0


def test_bad_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLEETMAP_READINGS_TIMEOUT", "two minutes")
    with pytest.raises(FleetMapConfigError, match="FLEETMAP_READINGS_TIMEOUT"):
        FleetMapConfig.from_env()


def test_zone() -> None:
    zone = FleetMapConfig(time_zone="UTC").zone()
    assert zone is not None
    assert datetime(2024, 5, 1, tzinfo=zone).utcoffset() == timedelta(0)


def test_unknown_zone() -> None:
    with pytest.raises(FleetMapConfigError, match="Unknown time zone"):
        FleetMapConfig(time_zone="Mars/Olympus_Mons").zone()
