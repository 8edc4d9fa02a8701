"""
Map framing for converted coordinates.

Computes the bounding box, center and slippy-map zoom level a map
collaborator needs to show a set of geographic points.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from coordsuite.models.coordinates import GeographicPoint

DEFAULT_CENTER = (41.651285, -0.869147)
DEFAULT_ZOOM = 15
SINGLE_POINT_ZOOM = 15

# Margin applied to the data extent so points do not sit on the map edge
ZOOM_MARGIN = 1.3

# Width in degrees of one tile at each zoom level
# https://wiki.openstreetmap.org/wiki/Zoom_levels
TILE_WIDTHS: Tuple[float, ...] = (
    360.0, 180.0, 90.0, 45.0, 22.5, 11.25, 5.625, 2.813, 1.406, 0.703, 0.352,
    0.176, 0.088, 0.044, 0.022, 0.011, 0.005, 0.003, 0.001, 0.0005, 0.00025,
)


@dataclass
class BoundingBox:
    """
    Geographic bounding box.

    Attributes:
        min_lat: Southern edge in degrees
        min_lon: Western edge in degrees
        max_lat: Northern edge in degrees
        max_lon: Eastern edge in degrees
    """

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    def __post_init__(self) -> None:
        """Validate bounding box."""
        if self.min_lat > self.max_lat:
            raise ValueError(f"min_lat ({self.min_lat}) must be <= max_lat ({self.max_lat})")
        if self.min_lon > self.max_lon:
            raise ValueError(f"min_lon ({self.min_lon}) must be <= max_lon ({self.max_lon})")

    @property
    def width(self) -> float:
        """Longitude extent in degrees."""
        return self.max_lon - self.min_lon

    @property
    def height(self) -> float:
        """Latitude extent in degrees."""
        return self.max_lat - self.min_lat

    @property
    def center(self) -> Tuple[float, float]:
        """Center as (latitude, longitude)."""
        return (
            (self.min_lat + self.max_lat) / 2,
            (self.min_lon + self.max_lon) / 2,
        )

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.min_lat <= latitude <= self.max_lat and self.min_lon <= longitude <= self.max_lon

    def to_dict(self) -> dict:
        return {
            "min_lat": self.min_lat,
            "min_lon": self.min_lon,
            "max_lat": self.max_lat,
            "max_lon": self.max_lon,
        }


@dataclass
class MapView:
    """
    Center and zoom for displaying a set of points.

    Attributes:
        center_lat: Latitude of the view center
        center_lon: Longitude of the view center
        zoom: Slippy-map zoom level
        bounds: Extent of the points, None for an empty set
    """

    center_lat: float
    center_lon: float
    zoom: int
    bounds: Optional[BoundingBox] = None

    def to_dict(self) -> dict:
        return {
            "center_lat": self.center_lat,
            "center_lon": self.center_lon,
            "zoom": self.zoom,
            "bounds": self.bounds.to_dict() if self.bounds else None,
        }


def _as_array(points: Sequence[GeographicPoint]) -> np.ndarray:
    return np.array([(p.latitude, p.longitude) for p in points], dtype=float)


def compute_bounds(points: Sequence[GeographicPoint]) -> BoundingBox:
    """
    Bounding box of a non-empty set of points.

    Raises:
        ValueError: If no points are given
    """
    if not points:
        raise ValueError("Cannot compute bounds of an empty point set")

    coords = _as_array(points)
    min_lat, min_lon = coords.min(axis=0)
    max_lat, max_lon = coords.max(axis=0)
    return BoundingBox(
        min_lat=float(min_lat),
        min_lon=float(min_lon),
        max_lat=float(max_lat),
        max_lon=float(max_lon),
    )


def calculate_zoom_level(points: Sequence[GeographicPoint]) -> int:
    """
    Zoom level at which all points fit on screen.

    A single point gets a close-up zoom. Otherwise the result is the first
    level whose tile width is smaller than the padded extent of the points,
    or the deepest level when the points (nearly) coincide.

    Args:
        points: Points to frame

    Returns:
        Zoom level, 0 to 20
    """
    if len(points) <= 1:
        return SINGLE_POINT_ZOOM

    bounds = compute_bounds(points)
    extent = ZOOM_MARGIN * max(bounds.height, bounds.width)

    for level, tile_width in enumerate(TILE_WIDTHS):
        if extent - tile_width > 0:
            return level
    return len(TILE_WIDTHS) - 1


def compute_map_view(points: Sequence[GeographicPoint]) -> MapView:
    """
    Map view centered on the mean of the points.

    An empty point set yields the default view.
    """
    if not points:
        return MapView(center_lat=DEFAULT_CENTER[0], center_lon=DEFAULT_CENTER[1], zoom=DEFAULT_ZOOM)

    center_lat, center_lon = _as_array(points).mean(axis=0)
    return MapView(
        center_lat=float(center_lat),
        center_lon=float(center_lon),
        zoom=calculate_zoom_level(points),
        bounds=compute_bounds(points),
    )
