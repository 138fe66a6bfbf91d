"""View layer: selection, sampling and display helpers over parsed readings."""

from pyfleetmap.view.bounds import DEFAULT_CENTER, DEFAULT_ZOOM, MapBounds, compute_bounds
from pyfleetmap.view.details import format_value, popup_lines, reading_details
from pyfleetmap.view.filters import select_readings
from pyfleetmap.view.sampling import (
    Marker,
    PathSegment,
    build_markers,
    marker_sample_rate,
    path_sample_rate,
    sample_markers,
    sample_paths,
)
from pyfleetmap.view.state import FleetView

__all__ = [
    "DEFAULT_CENTER",
    "DEFAULT_ZOOM",
    "FleetView",
    "MapBounds",
    "Marker",
    "PathSegment",
    "build_markers",
    "compute_bounds",
    "format_value",
    "marker_sample_rate",
    "path_sample_rate",
    "popup_lines",
    "reading_details",
    "sample_markers",
    "sample_paths",
    "select_readings",
]
