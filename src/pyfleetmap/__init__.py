"""pyfleetmap - Normalization and map sampling for vehicle tracking telemetry."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfleetmap")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfleetmap.client import FleetDataset, FleetMapClient
from pyfleetmap.config import FleetMapConfig
from pyfleetmap.directory import SensorDirectory, SensorInfo
from pyfleetmap.exceptions import (
    FleetMapConfigError,
    FleetMapDataError,
    FleetMapError,
    FleetMapTransportError,
)
from pyfleetmap.ingestion.documents import loads_readings, loads_summary, parse_readings, parse_summary
from pyfleetmap.ingestion.readings import normalize_reading
from pyfleetmap.ingestion.resolver import resolve_fields
from pyfleetmap.models import (
    FilterCriteria,
    ParsedFields,
    ParsedReading,
    SensorReading,
    SensorSummary,
)
from pyfleetmap.view import (
    FleetView,
    MapBounds,
    Marker,
    PathSegment,
    build_markers,
    compute_bounds,
    sample_markers,
    sample_paths,
    select_readings,
)

__all__ = [
    "__version__",
    "FilterCriteria",
    "FleetDataset",
    "FleetMapClient",
    "FleetMapConfig",
    "FleetMapConfigError",
    "FleetMapDataError",
    "FleetMapError",
    "FleetMapTransportError",
    "FleetView",
    "MapBounds",
    "Marker",
    "ParsedFields",
    "ParsedReading",
    "PathSegment",
    "SensorDirectory",
    "SensorInfo",
    "SensorReading",
    "SensorSummary",
    "build_markers",
    "compute_bounds",
    "loads_readings",
    "loads_summary",
    "normalize_reading",
    "parse_readings",
    "parse_summary",
    "resolve_fields",
    "sample_markers",
    "sample_paths",
    "select_readings",
]
