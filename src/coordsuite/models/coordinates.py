"""
Data models for geographic and UTM coordinates.

This module defines the point types exchanged between the parser, the
projection layer and the export/map collaborators, together with the
per-line outcome types returned by the converter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from coordsuite.core.errors import (
    ConversionError,
    CoordinateRangeError,
    InvalidZoneError,
)
from coordsuite.models.errors import ErrorKind


class Hemisphere(str, Enum):
    """UTM hemisphere designator."""

    NORTH = "N"
    SOUTH = "S"

    @classmethod
    def parse(cls, value: Union["Hemisphere", str]) -> "Hemisphere":
        """
        Parse a hemisphere token.

        Accepts ``N``, ``S``, ``North`` and ``South`` in any case.

        Args:
            value: Hemisphere instance or token

        Returns:
            Hemisphere

        Raises:
            InvalidZoneError: If the token is not recognized
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            token = value.strip().lower()
            if token in ("n", "north"):
                return cls.NORTH
            if token in ("s", "south"):
                return cls.SOUTH
        raise InvalidZoneError(
            f"Unrecognized hemisphere '{value}'", hemisphere=value
        )

    @classmethod
    def from_latitude(cls, latitude: float) -> "Hemisphere":
        """North for latitude >= 0, South otherwise."""
        return cls.NORTH if latitude >= 0 else cls.SOUTH

    @property
    def label(self) -> str:
        """Human-readable name."""
        return "North" if self is Hemisphere.NORTH else "South"


def check_zone_number(zone: Any) -> int:
    """
    Validate a UTM zone number on its own.

    Values are never coerced: 0, 61, 30.5 and True are rejected.

    Raises:
        InvalidZoneError: If zone is not an integer in [1, 60]
    """
    if isinstance(zone, bool) or not isinstance(zone, int):
        raise InvalidZoneError(
            f"UTM zone must be an integer between 1 and 60, got {zone!r}", zone=zone
        )
    if not 1 <= zone <= 60:
        raise InvalidZoneError(f"UTM zone must be between 1 and 60, got {zone}", zone=zone)
    return zone


class CoordinateFormat(str, Enum):
    """Representation of the coordinates in an input block."""

    UTM = "utm"
    LATLON = "latlon"


class Separator(str, Enum):
    """Delimiter style between the two numeric fields of a line."""

    COMMA = "comma"
    TAB = "tab"
    SPACE = "space"
    MIXED = "mixed"


class Direction(str, Enum):
    """Conversion direction selector."""

    AUTO = "auto"
    FORCE_UTM_TO_GEO = "utm_to_geo"
    FORCE_GEO_TO_UTM = "geo_to_utm"


@dataclass(frozen=True)
class GeographicPoint:
    """
    A WGS84 point in decimal degrees.

    Attributes:
        latitude: Latitude in degrees, [-90, 90]
        longitude: Longitude in degrees, [-180, 180]
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Reject out-of-range values."""
        if not -90 <= self.latitude <= 90:
            raise CoordinateRangeError(
                f"Latitude must be between -90 and 90, got {self.latitude}",
                field="latitude",
                value=self.latitude,
            )
        if not -180 <= self.longitude <= 180:
            raise CoordinateRangeError(
                f"Longitude must be between -180 and 180, got {self.longitude}",
                field="longitude",
                value=self.longitude,
            )

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple (latitude, longitude)."""
        return (self.latitude, self.longitude)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {"latitude": self.latitude, "longitude": self.longitude}

    def __str__(self) -> str:
        return f"{self.latitude:.6f}, {self.longitude:.6f}"


@dataclass(frozen=True)
class UtmPoint:
    """
    A UTM point. Easting/northing are meaningless without zone and hemisphere.

    Attributes:
        easting: Easting in meters (false easting included)
        northing: Northing in meters, >= 0 (false northing included in the south)
        zone: UTM zone number, 1-60
        hemisphere: North or South
    """

    easting: float
    northing: float
    zone: int
    hemisphere: Hemisphere

    def __post_init__(self) -> None:
        """Validate zone/hemisphere and northing."""
        check_zone_number(self.zone)
        if not isinstance(self.hemisphere, Hemisphere):
            object.__setattr__(self, "hemisphere", Hemisphere.parse(self.hemisphere))
        if self.northing < 0:
            raise CoordinateRangeError(
                f"Northing must not be negative, got {self.northing}",
                field="northing",
                value=self.northing,
            )

    @property
    def zone_label(self) -> str:
        """Zone and hemisphere, e.g. '30N'."""
        return f"{self.zone}{self.hemisphere.value}"

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple (easting, northing)."""
        return (self.easting, self.northing)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "easting": self.easting,
            "northing": self.northing,
            "zone": self.zone,
            "hemisphere": self.hemisphere.value,
        }

    def __str__(self) -> str:
        return f"{self.easting:.2f}, {self.northing:.2f} ({self.zone_label})"


@dataclass(frozen=True)
class DetectionResult:
    """Format and separator decided once for a whole input block."""

    format: CoordinateFormat
    separator: Separator

    def to_dict(self) -> dict:
        return {"format": self.format.value, "separator": self.separator.value}


@dataclass(frozen=True)
class ZoneOverride:
    """
    Explicit zone/hemisphere chosen by the caller.

    Values are kept as given and validated when a line is converted, so an
    invalid override is reported per line as an INVALID_ZONE failure.

    A field left as None is not overridden: latitude/longitude input then
    resolves it per point, UTM input takes it from the settings.
    """

    zone: Any = None
    hemisphere: Any = None


@dataclass(frozen=True)
class CoordinateRecord:
    """
    One successfully converted input line.

    Attributes:
        line_number: 1-based line number in the input block
        original: Point as read from the input
        converted: The same point in the other representation
    """

    line_number: int
    original: Union[GeographicPoint, UtmPoint]
    converted: Union[GeographicPoint, UtmPoint]

    ok = True

    def __post_init__(self) -> None:
        kinds = {type(self.original), type(self.converted)}
        if kinds != {GeographicPoint, UtmPoint}:
            raise TypeError(
                "A record pairs one GeographicPoint with one UtmPoint, "
                f"got {type(self.original).__name__} and {type(self.converted).__name__}"
            )

    @property
    def geographic(self) -> GeographicPoint:
        """The geographic side of the record."""
        if isinstance(self.original, GeographicPoint):
            return self.original
        return self.converted

    @property
    def utm(self) -> UtmPoint:
        """The UTM side of the record."""
        if isinstance(self.original, UtmPoint):
            return self.original
        return self.converted

    @property
    def source_format(self) -> CoordinateFormat:
        """Format of the input line."""
        if isinstance(self.original, UtmPoint):
            return CoordinateFormat.UTM
        return CoordinateFormat.LATLON

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "ok": True,
            "line_number": self.line_number,
            "source_format": self.source_format.value,
            "geographic": self.geographic.to_dict(),
            "utm": self.utm.to_dict(),
        }


@dataclass(frozen=True)
class LineFailure:
    """
    A line that could not be converted.

    Attributes:
        line_number: 1-based line number in the input block
        text: Original text of the line
        kind: Failure category
        message: Human-readable description
        details: Technical details (offending token, token count, zone, ...)
    """

    line_number: int
    text: str
    kind: ErrorKind
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    ok = False

    @classmethod
    def from_error(cls, line_number: int, text: str, error: ConversionError) -> "LineFailure":
        """Build a failure record from a per-line exception."""
        return cls(
            line_number=line_number,
            text=text,
            kind=error.kind,
            message=error.message,
            details=dict(error.details),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "ok": False,
            "line_number": self.line_number,
            "text": self.text,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


ParseOutcome = Union[CoordinateRecord, LineFailure]


@dataclass(frozen=True)
class ConversionResult:
    """
    Ordered outcome of converting one text block.

    Attributes:
        detection: Format/separator used for the block
        direction: Direction requested by the caller
        outcomes: One outcome per non-blank input line, in input order
    """

    detection: DetectionResult
    direction: Direction
    outcomes: Tuple[ParseOutcome, ...]

    @property
    def records(self) -> List[CoordinateRecord]:
        """Successful records in input order."""
        return [o for o in self.outcomes if o.ok]

    @property
    def failures(self) -> List[LineFailure]:
        """Failed lines in input order."""
        return [o for o in self.outcomes if not o.ok]

    @property
    def geographic_points(self) -> List[GeographicPoint]:
        return [r.geographic for r in self.records]

    @property
    def utm_points(self) -> List[UtmPoint]:
        return [r.utm for r in self.records]

    def zone_context(self) -> Optional[ZoneOverride]:
        """
        Zone and hemisphere of the first converted point.

        Feeding this to a later UTM to geographic conversion reproduces the
        zone chosen by a previous geographic to UTM run.
        """
        records = self.records
        if not records:
            return None
        first = records[0].utm
        return ZoneOverride(zone=first.zone, hemisphere=first.hemisphere)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "detection": self.detection.to_dict(),
            "direction": self.direction.value,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }

    def __len__(self) -> int:
        return len(self.outcomes)
