"""
UTM zone resolution and utilities.

This module maps longitudes to UTM zone numbers, derives hemispheres from
latitudes and validates zone/hemisphere pairs supplied by callers.
"""

import math
from typing import Any, Tuple, Union

from coordsuite.models.coordinates import Hemisphere, check_zone_number
from coordsuite.models.geodesy import UTM


def resolve_zone(longitude: float) -> int:
    """
    Resolve the UTM zone number for a longitude.

    UTM zones are numbered from 1 to 60, each covering 6 degrees of longitude.
    Zone 1 starts at 180°W. The result is clamped to [1, 60], so 180°E
    belongs to zone 60.

    Args:
        longitude: Longitude in decimal degrees (-180 to 180)

    Returns:
        Zone number

    Raises:
        ValueError: If longitude is out of valid range
    """
    if not -180 <= longitude <= 180:
        raise ValueError(f"Longitude must be between -180 and 180, got {longitude}")

    zone_number = math.floor((longitude + 180) / UTM.zone_width) + 1
    return min(max(zone_number, 1), 60)


def resolve_hemisphere(latitude: float) -> Hemisphere:
    """
    Hemisphere for a latitude, independent of the zone number.

    Args:
        latitude: Latitude in decimal degrees (-90 to 90)

    Returns:
        Hemisphere.NORTH for latitude >= 0, Hemisphere.SOUTH otherwise

    Raises:
        ValueError: If latitude is out of valid range
    """
    if not -90 <= latitude <= 90:
        raise ValueError(f"Latitude must be between -90 and 90, got {latitude}")

    return Hemisphere.from_latitude(latitude)


def validate_zone(zone: Any, hemisphere: Union[Hemisphere, str]) -> Tuple[int, Hemisphere]:
    """
    Validate a caller-supplied zone/hemisphere pair.

    Values are never coerced: 0, 61, 30.5 or "X" are all rejected.

    Args:
        zone: UTM zone number (1-60)
        hemisphere: Hemisphere or token ('N', 'S', 'North', 'South')

    Returns:
        Tuple of (zone_number, hemisphere)

    Raises:
        InvalidZoneError: If zone or hemisphere is invalid
    """
    return check_zone_number(zone), Hemisphere.parse(hemisphere)


def calculate_utm_central_meridian(zone_number: int) -> float:
    """
    Calculate the central meridian for a UTM zone.

    Args:
        zone_number: UTM zone number (1-60)

    Returns:
        Central meridian in decimal degrees

    Raises:
        InvalidZoneError: If zone_number is out of valid range
    """
    zone_number = check_zone_number(zone_number)
    return -180 + (zone_number - 1) * UTM.zone_width + UTM.zone_width / 2


def get_utm_zone_bounds(zone_number: int) -> Tuple[float, float]:
    """
    Get the longitude bounds for a UTM zone.

    Args:
        zone_number: UTM zone number (1-60)

    Returns:
        Tuple of (min_longitude, max_longitude)

    Raises:
        InvalidZoneError: If zone_number is out of valid range
    """
    zone_number = check_zone_number(zone_number)

    min_lon = -180 + (zone_number - 1) * UTM.zone_width
    return (min_lon, min_lon + UTM.zone_width)


def get_utm_epsg(zone_number: int, hemisphere: Union[Hemisphere, str]) -> int:
    """
    Get the WGS84 / UTM EPSG code for a zone.

    Args:
        zone_number: UTM zone number (1-60)
        hemisphere: Hemisphere or token

    Returns:
        EPSG code (326xx for the north, 327xx for the south)
    """
    zone_number, hemisphere = validate_zone(zone_number, hemisphere)

    if hemisphere is Hemisphere.NORTH:
        return 32600 + zone_number
    return 32700 + zone_number


def get_utm_letter_designator(latitude: float) -> str:
    """
    Get the UTM latitude band letter designator.

    Bands are 8 degrees tall (X is 12), lettered C to X without I and O.

    Args:
        latitude: Latitude in decimal degrees (-80 to 84)

    Returns:
        Letter designator (C-X)

    Raises:
        ValueError: If latitude is out of UTM range
    """
    if latitude < UTM.min_latitude or latitude > UTM.max_latitude:
        raise ValueError(f"UTM is only defined between 80°S and 84°N, got {latitude}")

    if latitude >= 72:
        return "X"

    bands = "CDEFGHJKLMNPQRSTUVWX"
    return bands[int((latitude + 80) / 8)]


def format_utm_zone(zone_number: int, hemisphere: Union[Hemisphere, str]) -> str:
    """
    Format a zone as a string such as '30N' or '56S'.
    """
    zone_number, hemisphere = validate_zone(zone_number, hemisphere)
    return f"{zone_number}{hemisphere.value}"
