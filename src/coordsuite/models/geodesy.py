"""
Reference ellipsoid and UTM projection parameters.

These are immutable configuration values owned by the projection model.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ellipsoid:
    """
    Reference ellipsoid.

    Attributes:
        name: Ellipsoid name
        semi_major_axis: Equatorial radius in meters
        inverse_flattening: 1/f
    """

    name: str
    semi_major_axis: float
    inverse_flattening: float

    def __post_init__(self) -> None:
        if self.semi_major_axis <= 0:
            raise ValueError(f"semi_major_axis must be positive, got {self.semi_major_axis}")
        if self.inverse_flattening <= 1:
            raise ValueError(f"inverse_flattening must be > 1, got {self.inverse_flattening}")

    @property
    def flattening(self) -> float:
        return 1.0 / self.inverse_flattening

    @property
    def third_flattening(self) -> float:
        """n = f / (2 - f)."""
        f = self.flattening
        return f / (2.0 - f)

    @property
    def eccentricity_squared(self) -> float:
        """e^2 = f (2 - f)."""
        f = self.flattening
        return f * (2.0 - f)

    @property
    def semi_minor_axis(self) -> float:
        return self.semi_major_axis * (1.0 - self.flattening)


WGS84 = Ellipsoid(name="WGS 84", semi_major_axis=6378137.0, inverse_flattening=298.257223563)


@dataclass(frozen=True)
class UtmParameters:
    """
    UTM projection constants.

    Attributes:
        scale_factor: Scale factor on the central meridian (k0)
        false_easting: Added to every easting, meters
        false_northing_south: Added to northings in the southern hemisphere, meters
        min_latitude: Southern limit of the projection band, degrees
        max_latitude: Northern limit of the projection band, degrees
        zone_width: Longitudinal width of a zone, degrees
    """

    scale_factor: float = 0.9996
    false_easting: float = 500000.0
    false_northing_south: float = 10000000.0
    min_latitude: float = -80.0
    max_latitude: float = 84.0
    zone_width: float = 6.0


UTM = UtmParameters()
