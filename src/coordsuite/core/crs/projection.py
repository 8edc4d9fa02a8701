"""
Transverse Mercator projection for UTM conversion.

Implements the Krüger series (to fourth order in the third flattening n),
which keeps forward/inverse round trips at the sub-millimetre level across
a UTM zone. No iteration is needed in either direction.
"""

import math
from typing import Optional, Tuple, Union

from coordsuite.core.crs.utm import calculate_utm_central_meridian, validate_zone
from coordsuite.core.errors import OutOfProjectionRangeError
from coordsuite.models.coordinates import Hemisphere
from coordsuite.models.geodesy import UTM, WGS84, Ellipsoid, UtmParameters


class TransverseMercator:
    """
    Transverse Mercator model for one ellipsoid and one set of UTM constants.

    Series coefficients are computed once on construction; instances hold
    no other state and may be shared between threads.
    """

    def __init__(self, ellipsoid: Ellipsoid = WGS84, parameters: UtmParameters = UTM):
        """
        Initialize the model.

        Args:
            ellipsoid: Reference ellipsoid
            parameters: Scale factor, false origin and projection band
        """
        self.ellipsoid = ellipsoid
        self.parameters = parameters

        n = ellipsoid.third_flattening
        n2, n3, n4 = n ** 2, n ** 3, n ** 4

        # Rectifying radius
        self._radius = ellipsoid.semi_major_axis / (1 + n) * (1 + n2 / 4 + n4 / 64)
        self._k0_radius = parameters.scale_factor * self._radius
        self._ecc = 2 * math.sqrt(n) / (1 + n)

        self._alpha = (
            n / 2 - 2 * n2 / 3 + 5 * n3 / 16 + 41 * n4 / 180,
            13 * n2 / 48 - 3 * n3 / 5 + 557 * n4 / 1440,
            61 * n3 / 240 - 103 * n4 / 140,
            49561 * n4 / 161280,
        )
        self._beta = (
            n / 2 - 2 * n2 / 3 + 37 * n3 / 96 - n4 / 360,
            n2 / 48 + n3 / 15 - 437 * n4 / 1440,
            17 * n3 / 480 - 37 * n4 / 840,
            4397 * n4 / 161280,
        )
        self._delta = (
            2 * n - 2 * n2 / 3 - 2 * n3 + 116 * n4 / 45,
            7 * n2 / 3 - 8 * n3 / 5 - 227 * n4 / 45,
            56 * n3 / 15 - 136 * n4 / 35,
            4279 * n4 / 630,
        )

    def _check_latitude(self, latitude: float) -> None:
        if not self.parameters.min_latitude <= latitude <= self.parameters.max_latitude:
            raise OutOfProjectionRangeError(
                f"Latitude {latitude} is outside the UTM band "
                f"[{self.parameters.min_latitude}, {self.parameters.max_latitude}]",
                latitude=latitude,
            )

    def forward(self, latitude: float, longitude: float, central_meridian: float) -> Tuple[float, float]:
        """
        Project a geographic point.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            central_meridian: Central meridian in degrees

        Returns:
            Tuple (x, y) in meters, scaled by k0, without false origin

        Raises:
            OutOfProjectionRangeError: Outside the projection band or a
                quarter sphere away from the central meridian
        """
        self._check_latitude(latitude)

        # Longitude difference wrapped to [-180, 180)
        d_lon = (longitude - central_meridian + 180.0) % 360.0 - 180.0
        if abs(d_lon) >= 90.0:
            raise OutOfProjectionRangeError(
                f"Longitude {longitude} is too far from central meridian {central_meridian}",
                latitude=latitude,
                details={"longitude": longitude, "central_meridian": central_meridian},
            )

        phi = math.radians(latitude)
        lam = math.radians(d_lon)
        sin_phi = math.sin(phi)

        try:
            t = math.sinh(math.atanh(sin_phi) - self._ecc * math.atanh(self._ecc * sin_phi))
            xi_p = math.atan2(t, math.cos(lam))
            eta_p = math.atanh(math.sin(lam) / math.sqrt(1 + t * t))

            xi = xi_p
            eta = eta_p
            for j, a in enumerate(self._alpha, start=1):
                xi += a * math.sin(2 * j * xi_p) * math.cosh(2 * j * eta_p)
                eta += a * math.cos(2 * j * xi_p) * math.sinh(2 * j * eta_p)
        except (ValueError, OverflowError) as e:
            raise OutOfProjectionRangeError(
                f"Point ({latitude}, {longitude}) cannot be projected: {e}",
                latitude=latitude,
            )

        return self._k0_radius * eta, self._k0_radius * xi

    def inverse(self, x: float, y: float, central_meridian: float) -> Tuple[float, float]:
        """
        Unproject a point given without false origin.

        Args:
            x: Easting minus false easting, meters
            y: Northing minus false northing, meters
            central_meridian: Central meridian in degrees

        Returns:
            Tuple (latitude, longitude) in degrees

        Raises:
            OutOfProjectionRangeError: If the point lies outside the projection
                band or beyond a pole
        """
        xi = y / self._k0_radius
        eta = x / self._k0_radius

        try:
            xi_p = xi
            eta_p = eta
            for j, b in enumerate(self._beta, start=1):
                xi_p -= b * math.sin(2 * j * xi) * math.cosh(2 * j * eta)
                eta_p -= b * math.cos(2 * j * xi) * math.sinh(2 * j * eta)

            # Past a pole the series folds back onto the opposite meridian
            if abs(xi_p) > math.pi / 2 or math.cos(xi_p) < 0:
                raise OutOfProjectionRangeError(
                    f"Projected point ({x}, {y}) lies beyond the pole",
                    details={"x": x, "y": y},
                )

            chi = math.asin(math.sin(xi_p) / math.cosh(eta_p))
            phi = chi
            for j, d in enumerate(self._delta, start=1):
                phi += d * math.sin(2 * j * chi)

            lam = math.atan2(math.sinh(eta_p), math.cos(xi_p))
        except (ValueError, OverflowError) as e:
            raise OutOfProjectionRangeError(
                f"Projected point ({x}, {y}) cannot be unprojected: {e}",
                details={"x": x, "y": y},
            )

        latitude = math.degrees(phi)
        longitude = (central_meridian + math.degrees(lam) + 180.0) % 360.0 - 180.0
        if longitude == -180.0 and central_meridian > 0:
            longitude = 180.0

        self._check_latitude(latitude)
        return latitude, longitude


_DEFAULT_MODEL = TransverseMercator()


def get_default_model() -> TransverseMercator:
    """Shared WGS84 / UTM model."""
    return _DEFAULT_MODEL


def geographic_to_utm(
    latitude: float,
    longitude: float,
    zone: int,
    hemisphere: Optional[Union[Hemisphere, str]] = None,
    model: Optional[TransverseMercator] = None,
) -> Tuple[float, float]:
    """
    Convert a geographic point to UTM easting/northing in a given zone.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        zone: UTM zone number (1-60)
        hemisphere: Hemisphere whose false northing applies; defaults to
            the hemisphere of the latitude
        model: Projection model (default: WGS84 UTM)

    Returns:
        Tuple of (easting, northing) in meters

    Raises:
        InvalidZoneError: If zone or hemisphere is invalid
        OutOfProjectionRangeError: If the point cannot be projected
    """
    model = model or _DEFAULT_MODEL
    if hemisphere is None:
        hemisphere = Hemisphere.from_latitude(latitude)
    zone, hemisphere = validate_zone(zone, hemisphere)

    x, y = model.forward(latitude, longitude, calculate_utm_central_meridian(zone))

    easting = x + model.parameters.false_easting
    northing = y
    if hemisphere is Hemisphere.SOUTH:
        northing += model.parameters.false_northing_south

    if northing < 0:
        raise OutOfProjectionRangeError(
            f"Latitude {latitude} yields a negative northing in zone {zone}{hemisphere.value}",
            latitude=latitude,
            suggestions=["Use the southern hemisphere for points south of the equator"],
        )

    return easting, northing


def utm_to_geographic(
    easting: float,
    northing: float,
    zone: int,
    hemisphere: Union[Hemisphere, str],
    model: Optional[TransverseMercator] = None,
) -> Tuple[float, float]:
    """
    Convert UTM easting/northing to a geographic point.

    Args:
        easting: Easting in meters
        northing: Northing in meters
        zone: UTM zone number (1-60)
        hemisphere: Hemisphere of the point
        model: Projection model (default: WGS84 UTM)

    Returns:
        Tuple of (latitude, longitude) in degrees

    Raises:
        InvalidZoneError: If zone or hemisphere is invalid
        OutOfProjectionRangeError: If the point falls outside the projection band
            or on the other side of the equator from its hemisphere
    """
    model = model or _DEFAULT_MODEL
    zone, hemisphere = validate_zone(zone, hemisphere)

    x = easting - model.parameters.false_easting
    y = northing
    if hemisphere is Hemisphere.SOUTH:
        y -= model.parameters.false_northing_south

    latitude, longitude = model.inverse(x, y, calculate_utm_central_meridian(zone))

    # A southern northing above the false northing lies north of the equator
    if Hemisphere.from_latitude(latitude) is not hemisphere and latitude != 0:
        raise OutOfProjectionRangeError(
            f"Northing {northing} lies outside the {hemisphere.label.lower()}ern hemisphere "
            f"of zone {zone}{hemisphere.value}",
            latitude=latitude,
            suggestions=[f"Check the hemisphere of zone {zone}"],
        )

    return latitude, longitude
