"""Sensor directory: display names and colors per tracking device.

The table is deployment configuration, supplied at startup either as a
mapping or as a JSON file::

    {
        "6e64a7d7-...": {"name": "Bus 1", "color": "#FF6B6B"},
        "e7fc8e4a-...": "Bus 2"
    }

A bare string entry sets only the name. Unknown sensors display their
identifier and the fallback color.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from pyfleetmap._constants import FALLBACK_COLOR
from pyfleetmap.exceptions import FleetMapConfigError

if TYPE_CHECKING:
    from pyfleetmap.config import FleetMapConfig

_logger = logging.getLogger(__name__)


class SensorInfo(BaseModel):
    """Display attributes of one sensor."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str | None = None
    color: str | None = None


class SensorDirectory:
    """Read-only lookup from sensor id to display name and color."""

    def __init__(
        self,
        entries: Mapping[str, SensorInfo] | None = None,
        *,
        fallback_color: str = FALLBACK_COLOR,
    ) -> None:
        self._entries: dict[str, SensorInfo] = dict(entries or {})
        self._fallback_color = fallback_color

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, fallback_color: str = FALLBACK_COLOR) -> SensorDirectory:
        """Build a directory from ``{sensor_id: {"name", "color"} | name}``."""
        entries: dict[str, SensorInfo] = {}
        for sensor_id, value in data.items():
            if isinstance(value, str):
                entries[str(sensor_id)] = SensorInfo(name=value)
            else:
                entries[str(sensor_id)] = SensorInfo.model_validate(value)
        return cls(entries, fallback_color=fallback_color)

    @classmethod
    def from_file(cls, path: str | Path, *, fallback_color: str = FALLBACK_COLOR) -> SensorDirectory:
        """Load a directory from a JSON file.

        Raises
        ------
        FleetMapConfigError
            The file cannot be read, is not JSON, or has the wrong shape.
        """
        file_path = Path(path)
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise FleetMapConfigError(f"Cannot read sensors file {file_path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise FleetMapConfigError(f"Sensors file {file_path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise FleetMapConfigError(f"Sensors file {file_path} must contain a JSON object")
        try:
            return cls.from_mapping(data, fallback_color=fallback_color)
        except ValidationError as exc:
            raise FleetMapConfigError(f"Invalid sensor entry in {file_path}: {exc}") from exc

    @classmethod
    def from_config(cls, config: FleetMapConfig) -> SensorDirectory:
        if config.sensors_file:
            return cls.from_file(config.sensors_file, fallback_color=config.fallback_color)
        return cls(fallback_color=config.fallback_color)

    def __contains__(self, sensor_id: object) -> bool:
        return sensor_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def known_ids(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def fallback_color(self) -> str:
        return self._fallback_color

    def name_of(self, sensor_id: str) -> str:
        info = self._entries.get(sensor_id)
        if info is None or not info.name:
            if info is None:
                _logger.debug("Unknown sensor %s; displaying its identifier", sensor_id)
            return sensor_id
        return info.name

    def color_of(self, sensor_id: str) -> str:
        info = self._entries.get(sensor_id)
        if info is None or not info.color:
            return self._fallback_color
        return info.color
