"""Custom exception hierarchy for pyfleetmap.

The normalization and sampling pipeline never raises; these errors belong
to the ingestion edge (configuration, fetching and document parsing).
"""

from __future__ import annotations


class FleetMapError(Exception):
    """Base exception for all pyfleetmap errors."""


class FleetMapConfigError(FleetMapError):
    """Invalid or missing configuration."""


class FleetMapTransportError(FleetMapError):
    """HTTP-level failure (network, non-200, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class FleetMapDataError(FleetMapError):
    """A source document is not valid JSON or does not have the documented shape."""

    def __init__(self, message: str, *, document: str = "") -> None:
        self.document = document
        super().__init__(message)
