"""
Map framing helpers for converted coordinates.
"""

from coordsuite.core.visualization.map_view import (
    BoundingBox,
    MapView,
    TILE_WIDTHS,
    calculate_zoom_level,
    compute_bounds,
    compute_map_view,
)

__all__ = [
    "BoundingBox",
    "MapView",
    "TILE_WIDTHS",
    "calculate_zoom_level",
    "compute_bounds",
    "compute_map_view",
]
