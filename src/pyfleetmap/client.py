"""High-level async loader for the telemetry documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from pyfleetmap._transport import DocumentTransport, Transport
from pyfleetmap.config import FleetMapConfig
from pyfleetmap.directory import SensorDirectory
from pyfleetmap.exceptions import FleetMapConfigError, FleetMapError
from pyfleetmap.ingestion.documents import loads_readings, loads_summary
from pyfleetmap.models.reading import SensorReading
from pyfleetmap.models.summary import SensorSummary
from pyfleetmap.view.state import FleetView

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FleetDataset:
    """Both documents, loaded and validated."""

    summary: SensorSummary
    readings: tuple[SensorReading, ...]


class FleetMapClient:
    """Async loader for the summary and readings documents.

    Usage::

        async with FleetMapClient(config) as client:
            dataset = await client.load()
        view = client.view(dataset)
    """

    def __init__(
        self,
        config: FleetMapConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FleetMapClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = DocumentTransport(self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise FleetMapError("Client not initialized. Use 'async with FleetMapClient(...) as client:'")
        return self._transport

    @staticmethod
    def _require_url(url: str, name: str) -> str:
        if not url:
            raise FleetMapConfigError(f"No {name} URL configured")
        return url

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def load_summary(self) -> SensorSummary:
        """Fetch and validate the summary document."""
        url = self._require_url(self._config.summary_url, "summary")
        text = await self._require_transport().get_text(url, timeout=self._config.summary_timeout)
        summary = loads_summary(text)
        _logger.debug(
            "Summary loaded: %d readings across %d sensors",
            summary.total_readings,
            len(summary.unique_sensor_ids),
        )
        return summary

    async def load_readings(self) -> tuple[SensorReading, ...]:
        """Fetch and validate the readings document."""
        url = self._require_url(self._config.readings_url, "readings")
        text = await self._require_transport().get_text(url, timeout=self._config.readings_timeout)
        readings = loads_readings(text)
        _logger.debug("Loaded %d readings", len(readings))
        return readings

    async def load(self) -> FleetDataset:
        """Fetch the summary first (small), then the readings."""
        summary = await self.load_summary()
        readings = await self.load_readings()
        return FleetDataset(summary=summary, readings=readings)

    def view(self, dataset: FleetDataset, directory: SensorDirectory | None = None) -> FleetView:
        """Bind *dataset* to a :class:`FleetView` using this client's configuration."""
        if directory is None:
            directory = SensorDirectory.from_config(self._config)
        return FleetView(dataset.readings, dataset.summary, directory, tz=self._config.zone())
