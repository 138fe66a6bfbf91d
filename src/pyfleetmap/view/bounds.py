"""Map viewport helpers."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from pyfleetmap._constants import DEFAULT_CENTER, DEFAULT_ZOOM
from pyfleetmap.models.reading import ParsedReading

__all__ = ["DEFAULT_CENTER", "DEFAULT_ZOOM", "MapBounds", "compute_bounds"]


class MapBounds(BaseModel):
    """Bounding box, in degrees, of a set of positions."""

    model_config = ConfigDict(frozen=True)

    south: float
    west: float
    north: float
    east: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.south + self.north) / 2, (self.west + self.east) / 2


def compute_bounds(readings: Iterable[ParsedReading]) -> MapBounds | None:
    """Smallest box containing every resolved position, ``None`` if there are none."""
    lats: list[float] = []
    lngs: list[float] = []
    for reading in readings:
        lat, lng = reading.parsed.latitude, reading.parsed.longitude
        if lat is None or lng is None:
            continue
        lats.append(lat)
        lngs.append(lng)
    if not lats:
        return None
    return MapBounds(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))
