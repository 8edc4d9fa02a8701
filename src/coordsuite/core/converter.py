"""
Coordinate conversion service.

Turns a block of pasted text into an ordered sequence of converted
coordinate records. Each line is converted independently: a malformed or
out-of-range line becomes a LineFailure at its own position and the rest
of the block is still converted.
"""

import logging
from typing import List, Optional, Union

from coordsuite.core.config import Settings, settings as default_settings
from coordsuite.core.crs.projection import (
    TransverseMercator,
    geographic_to_utm,
    get_default_model,
    utm_to_geographic,
)
from coordsuite.core.crs.utm import resolve_hemisphere, resolve_zone
from coordsuite.core.errors import ConversionError
from coordsuite.core.parsers.detector import detect_format, detect_separator
from coordsuite.core.parsers.line_parser import parse_line
from coordsuite.models.coordinates import (
    CoordinateFormat,
    CoordinateRecord,
    ConversionResult,
    DetectionResult,
    Direction,
    GeographicPoint,
    Hemisphere,
    LineFailure,
    ParseOutcome,
    UtmPoint,
    ZoneOverride,
)

logger = logging.getLogger(__name__)

_FORCED_FORMATS = {
    Direction.FORCE_UTM_TO_GEO: CoordinateFormat.UTM,
    Direction.FORCE_GEO_TO_UTM: CoordinateFormat.LATLON,
}


class CoordinateConverter:
    """
    Converts coordinate text between UTM and latitude/longitude.

    The converter keeps no state between calls; every call to convert()
    builds fresh records.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        model: Optional[TransverseMercator] = None,
    ):
        """
        Initialize converter.

        Args:
            settings: Settings providing the detection sample size and the
                default zone for UTM input (default: global settings)
            model: Projection model (default: WGS84 UTM)
        """
        self.settings = settings or default_settings
        self.model = model or get_default_model()

    def convert(
        self,
        raw_text: str,
        direction: Direction = Direction.AUTO,
        override: Optional[ZoneOverride] = None,
    ) -> ConversionResult:
        """
        Convert a block of coordinate text.

        Args:
            raw_text: Newline-delimited text, one coordinate pair per line
            direction: AUTO to follow the detected format, or a forced direction
            override: Explicit zone and/or hemisphere. For latitude/longitude
                input a given field replaces per-point resolution; for UTM
                input it names the zone of every point. Fields left as None
                keep the per-point or configured value

        Returns:
            ConversionResult with one outcome per non-blank line, in input order

        Raises:
            UndetectableFormatError: In AUTO mode, if the block's format
                cannot be detected
        """
        direction = Direction(direction)
        detection = self._detect(raw_text, direction)

        outcomes: List[ParseOutcome] = []
        for line_number, line in enumerate(raw_text.splitlines(), start=1):
            if not line.strip():
                continue
            outcomes.append(self.convert_line(line, line_number, detection, override))

        result = ConversionResult(
            detection=detection,
            direction=direction,
            outcomes=tuple(outcomes),
        )
        logger.debug(
            f"Converted {len(result.records)} of {len(outcomes)} line(s) "
            f"as {detection.format.value} ({direction.value})",
            extra={
                "source_format": detection.format.value,
                "converted": len(result.records),
                "failed": len(result.failures),
            },
        )
        return result

    def _detect(self, raw_text: str, direction: Direction) -> DetectionResult:
        if direction is Direction.AUTO:
            return detect_format(raw_text, self.settings.detection_sample_size)
        return DetectionResult(
            format=_FORCED_FORMATS[direction],
            separator=detect_separator(raw_text),
        )

    def convert_line(
        self,
        line: str,
        line_number: int,
        detection: DetectionResult,
        override: Optional[ZoneOverride] = None,
    ) -> ParseOutcome:
        """
        Convert one line in the direction implied by ``detection.format``.

        Returns:
            CoordinateRecord on success, LineFailure otherwise
        """
        try:
            first, second = parse_line(line, detection)
            if detection.format is CoordinateFormat.LATLON:
                original, converted = self._from_geographic(first, second, override)
            else:
                original, converted = self._from_utm(first, second, override)
        except ConversionError as e:
            return LineFailure.from_error(line_number, line, e)

        return CoordinateRecord(line_number=line_number, original=original, converted=converted)

    def _from_geographic(self, latitude: float, longitude: float, override: Optional[ZoneOverride]):
        point = GeographicPoint(latitude=latitude, longitude=longitude)
        override = override or ZoneOverride()

        zone = override.zone if override.zone is not None else resolve_zone(point.longitude)
        hemisphere = override.hemisphere
        if hemisphere is None:
            hemisphere = resolve_hemisphere(point.latitude)

        easting, northing = geographic_to_utm(
            point.latitude, point.longitude, zone, hemisphere, model=self.model
        )
        return point, UtmPoint(
            easting=easting,
            northing=northing,
            zone=zone,
            hemisphere=Hemisphere.parse(hemisphere),
        )

    def _from_utm(self, easting: float, northing: float, override: Optional[ZoneOverride]):
        override = override or ZoneOverride()
        zone = override.zone if override.zone is not None else self.settings.default_zone
        hemisphere = override.hemisphere
        if hemisphere is None:
            hemisphere = self.settings.default_hemisphere

        latitude, longitude = utm_to_geographic(
            easting, northing, zone, hemisphere, model=self.model
        )
        point = UtmPoint(
            easting=easting,
            northing=northing,
            zone=zone,
            hemisphere=Hemisphere.parse(hemisphere),
        )
        return point, GeographicPoint(latitude=latitude, longitude=longitude)


def convert(
    raw_text: str,
    direction: Union[Direction, str] = Direction.AUTO,
    zone: Optional[int] = None,
    hemisphere: Optional[Union[Hemisphere, str]] = None,
) -> ConversionResult:
    """
    Convert a block of coordinate text (convenience function).

    Args:
        raw_text: Newline-delimited coordinate text
        direction: Direction selector
        zone: Optional explicit UTM zone
        hemisphere: Optional explicit hemisphere; either may be given alone

    Returns:
        ConversionResult

    Raises:
        UndetectableFormatError: In AUTO mode, if the format cannot be detected
    """
    override = None
    if zone is not None or hemisphere is not None:
        override = ZoneOverride(zone=zone, hemisphere=hemisphere)
    return CoordinateConverter().convert(raw_text, Direction(direction), override)
