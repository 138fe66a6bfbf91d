"""Library configuration for pyfleetmap."""

from __future__ import annotations

import dataclasses
import os
from datetime import tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pyfleetmap._constants import FALLBACK_COLOR, READINGS_TIMEOUT_S, SUMMARY_TIMEOUT_S
from pyfleetmap.exceptions import FleetMapConfigError


@dataclasses.dataclass(frozen=True)
class FleetMapConfig:
    """Library configuration.

    Parameters
    ----------
    summary_url : str
        URL of the summary document.
    readings_url : str
        URL of the readings document.
    summary_timeout : float
        Seconds allowed for fetching the summary document.
    readings_timeout : float
        Seconds allowed for fetching the readings document. The readings
        document is large; defaults to two minutes.
    time_zone : str or None
        IANA time zone the calendar-date filter is evaluated in. ``None``
        uses the process local zone.
    sensors_file : str or None
        Path to a JSON sensor directory (see :mod:`pyfleetmap.directory`).
    fallback_color : str
        Color used for sensors missing from the directory.
    """

    summary_url: str = ""
    readings_url: str = ""
    summary_timeout: float = SUMMARY_TIMEOUT_S
    readings_timeout: float = READINGS_TIMEOUT_S
    time_zone: str | None = None
    sensors_file: str | None = None
    fallback_color: str = FALLBACK_COLOR

    def zone(self) -> tzinfo | None:
        """Resolve :attr:`time_zone`.

        Raises
        ------
        FleetMapConfigError
            The zone name is unknown.
        """
        if not self.time_zone:
            return None
        try:
            return ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise FleetMapConfigError(f"Unknown time zone {self.time_zone!r}") from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> FleetMapConfig:
        """Create configuration from environment variables.

        Reads ``FLEETMAP_*`` variables. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        FleetMapConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "FLEETMAP_SUMMARY_URL": "summary_url",
            "FLEETMAP_READINGS_URL": "readings_url",
            "FLEETMAP_TIME_ZONE": "time_zone",
            "FLEETMAP_SENSORS_FILE": "sensors_file",
            "FLEETMAP_FALLBACK_COLOR": "fallback_color",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # timeouts are numeric, handle separately
        for env_key, field_name in (
            ("FLEETMAP_SUMMARY_TIMEOUT", "summary_timeout"),
            ("FLEETMAP_READINGS_TIMEOUT", "readings_timeout"),
        ):
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise FleetMapConfigError(f"{env_key} must be a number of seconds, got {val!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
