"""
UTM projection module.

This module provides:
- UTM zone and hemisphere resolution
- Zone/hemisphere validation
- Forward and inverse Transverse Mercator projection
"""

from coordsuite.core.crs.projection import (
    TransverseMercator,
    geographic_to_utm,
    get_default_model,
    utm_to_geographic,
)
from coordsuite.core.crs.utm import (
    calculate_utm_central_meridian,
    format_utm_zone,
    get_utm_epsg,
    get_utm_letter_designator,
    get_utm_zone_bounds,
    resolve_hemisphere,
    resolve_zone,
    validate_zone,
)

__all__ = [
    # Projection
    "TransverseMercator",
    "geographic_to_utm",
    "get_default_model",
    "utm_to_geographic",
    # UTM utilities
    "calculate_utm_central_meridian",
    "format_utm_zone",
    "get_utm_epsg",
    "get_utm_letter_designator",
    "get_utm_zone_bounds",
    "resolve_hemisphere",
    "resolve_zone",
    "validate_zone",
]
