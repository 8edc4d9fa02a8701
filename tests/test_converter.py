"""
Tests for the coordinate conversion service.
"""

import pytest

from coordsuite.core.config import Settings
from coordsuite.core.converter import CoordinateConverter, convert
from coordsuite.core.errors import UndetectableFormatError
from coordsuite.models.coordinates import (
    CoordinateFormat,
    CoordinateRecord,
    Direction,
    GeographicPoint,
    Hemisphere,
    LineFailure,
    Separator,
    UtmPoint,
    ZoneOverride,
)
from coordsuite.models.errors import ErrorKind


@pytest.fixture
def converter() -> CoordinateConverter:
    """Converter with default settings."""
    return CoordinateConverter(settings=Settings())


class TestBatchConversion:
    """Tests for converting whole blocks."""

    def test_malformed_middle_line(self, converter: CoordinateConverter) -> None:
        """One bad line never discards the valid ones."""
        text = "41.651285, -0.869147\nnot,a,number\n41.652000, -0.870000"

        result = converter.convert(text)

        assert len(result) == 3
        assert [r.line_number for r in result.records] == [1, 3]
        assert len(result.failures) == 1

        failure = result.failures[0]
        assert failure.line_number == 2
        assert failure.text == "not,a,number"
        assert failure.kind is ErrorKind.TOKEN_COUNT_MISMATCH

    def test_outcomes_follow_input_order(self, converter: CoordinateConverter) -> None:
        text = "41.65, -0.87\n41.66, abc\n41.67, -0.89\n85.0, 10.0\n41.68, -0.90"

        result = converter.convert(text)

        assert [o.line_number for o in result.outcomes] == [1, 2, 3, 4, 5]
        assert [o.ok for o in result.outcomes] == [True, False, True, False, True]
        assert result.outcomes[1].kind is ErrorKind.NUMERIC_PARSE_FAILURE
        assert result.outcomes[3].kind is ErrorKind.OUT_OF_PROJECTION_RANGE

    def test_blank_lines_keep_numbering(self, converter: CoordinateConverter) -> None:
        """Blank lines produce no outcome but still count."""
        text = "41.65, -0.87\n\n   \n41.66, -0.88\n"

        result = converter.convert(text)

        assert len(result) == 2
        assert [r.line_number for r in result.records] == [1, 4]

    def test_record_pairs_both_representations(self, converter: CoordinateConverter) -> None:
        result = converter.convert("41.651285, -0.869147")
        record = result.records[0]

        assert isinstance(record, CoordinateRecord)
        assert isinstance(record.original, GeographicPoint)
        assert isinstance(record.converted, UtmPoint)
        assert record.source_format is CoordinateFormat.LATLON
        assert record.utm.zone == 30
        assert record.utm.hemisphere is Hemisphere.NORTH
        assert record.utm.easting == pytest.approx(677438, abs=5)
        assert record.utm.northing == pytest.approx(4613252, abs=5)

    def test_detection_reported(self, converter: CoordinateConverter) -> None:
        result = converter.convert("676000\t4610000")

        assert result.detection.format is CoordinateFormat.UTM
        assert result.detection.separator is Separator.TAB
        assert result.direction is Direction.AUTO

    def test_undetectable_block_raises(self, converter: CoordinateConverter) -> None:
        """Detection failure concerns the whole block and is not a line failure."""
        with pytest.raises(UndetectableFormatError):
            converter.convert("hello\nworld")

    def test_converter_is_stateless(self, converter: CoordinateConverter) -> None:
        first = converter.convert("41.65, -0.87")
        second = converter.convert("676000, 4610000")
        again = converter.convert("41.65, -0.87")

        assert second.detection.format is CoordinateFormat.UTM
        assert first.records[0].utm == again.records[0].utm


class TestGeographicInput:
    """Tests for latitude/longitude to UTM conversion."""

    def test_zone_resolved_per_point(self, converter: CoordinateConverter) -> None:
        text = "41.65, -0.87\n41.65, 2.17\n-33.8688, 151.2093"

        result = converter.convert(text)

        assert [u.zone_label for u in result.utm_points] == ["30N", "31N", "56S"]

    def test_uniform_zone_override(self, converter: CoordinateConverter) -> None:
        """An override places every point in the same zone."""
        text = "41.65, -0.87\n41.65, 2.17"

        result = converter.convert(text, override=ZoneOverride(zone=31, hemisphere=Hemisphere.NORTH))

        assert [u.zone for u in result.utm_points] == [31, 31]
        assert result.utm_points[0].easting < 200000

    def test_hemisphere_only_override_keeps_per_point_zones(self, converter: CoordinateConverter) -> None:
        """A hemisphere without a zone does not pin every point to one zone."""
        text = "41.65, -0.87\n41.65, 2.17"

        result = converter.convert(text, override=ZoneOverride(hemisphere="N"))

        assert [u.zone_label for u in result.utm_points] == ["30N", "31N"]

    def test_zone_only_override_keeps_hemisphere_of_latitude(self, converter: CoordinateConverter) -> None:
        result = converter.convert("-33.8688, 151.2093", override=ZoneOverride(zone=56))

        assert result.utm_points[0].zone_label == "56S"
        assert result.utm_points[0].northing > 6_000_000

    def test_invalid_override_zone(self, converter: CoordinateConverter) -> None:
        """An invalid zone is reported on each line, never coerced."""
        result = converter.convert("41.65, -0.87\n41.66, -0.88", override=ZoneOverride(zone=61))

        assert not result.records
        assert [f.kind for f in result.failures] == [ErrorKind.INVALID_ZONE] * 2
        assert result.failures[0].details["zone"] == 61

    def test_invalid_override_hemisphere(self, converter: CoordinateConverter) -> None:
        result = converter.convert("41.65, -0.87", override=ZoneOverride(zone=30, hemisphere="X"))

        assert result.failures[0].kind is ErrorKind.INVALID_ZONE
        assert result.failures[0].details["hemisphere"] == "X"

    @pytest.mark.parametrize("line", ["84.5, 10.0", "-80.5, 10.0", "89.999, 0"])
    def test_outside_projection_band(self, converter: CoordinateConverter, line: str) -> None:
        result = converter.convert(f"{line}\n41.65, -0.87")

        assert result.outcomes[0].kind is ErrorKind.OUT_OF_PROJECTION_RANGE
        assert result.outcomes[1].ok

    def test_out_of_range_values_rejected(self) -> None:
        """Values outside geographic bounds are rejected, not clamped."""
        result = convert("95.0, 10.0\n41.65, -0.87", direction="geo_to_utm")

        failure = result.outcomes[0]
        assert failure.kind is ErrorKind.OUT_OF_PROJECTION_RANGE
        assert failure.details["field"] == "latitude"


class TestUtmInput:
    """Tests for UTM to latitude/longitude conversion."""

    def test_default_zone(self, converter: CoordinateConverter) -> None:
        """UTM input without override uses the configured zone."""
        result = converter.convert("677438, 4613252")
        record = result.records[0]

        assert isinstance(record.original, UtmPoint)
        assert record.original.zone_label == "30N"
        assert record.geographic.latitude == pytest.approx(41.651285, abs=1e-4)
        assert record.geographic.longitude == pytest.approx(-0.869147, abs=1e-4)

    def test_configured_default_zone(self) -> None:
        converter = CoordinateConverter(settings=Settings(default_zone=56, default_hemisphere="S"))

        record = converter.convert("334000, 6252000").records[0]

        assert record.utm.zone_label == "56S"
        assert record.geographic.latitude == pytest.approx(-33.85, abs=0.05)
        assert record.geographic.longitude == pytest.approx(151.2, abs=0.05)

    def test_explicit_zone(self, converter: CoordinateConverter) -> None:
        result = converter.convert(
            "334000, 6252000",
            override=ZoneOverride(zone=56, hemisphere="south"),
        )

        assert result.records[0].utm.hemisphere is Hemisphere.SOUTH
        assert result.records[0].geographic.latitude < 0

    @pytest.mark.parametrize("zone", [0, 61, 30.5, "X"])
    def test_invalid_zone(self, converter: CoordinateConverter, zone) -> None:
        result = converter.convert("677438, 4613252", override=ZoneOverride(zone=zone))
        assert result.failures[0].kind is ErrorKind.INVALID_ZONE

    def test_northing_beyond_band(self, converter: CoordinateConverter) -> None:
        result = converter.convert("500000, 9900000\n677438, 4613252")

        assert result.outcomes[0].kind is ErrorKind.OUT_OF_PROJECTION_RANGE
        assert result.outcomes[1].ok

    def test_northing_beyond_pole(self, converter: CoordinateConverter) -> None:
        """A northing past the pole fails instead of landing on the far meridian."""
        result = converter.convert(
            "500000 12000000\n677438 4613252",
            Direction.FORCE_UTM_TO_GEO,
            ZoneOverride(zone=30, hemisphere="N"),
        )

        failure = result.outcomes[0]
        assert isinstance(failure, LineFailure)
        assert failure.kind is ErrorKind.OUT_OF_PROJECTION_RANGE
        assert failure.line_number == 1
        assert result.outcomes[1].ok

    def test_southern_northing_north_of_equator(self, converter: CoordinateConverter) -> None:
        result = converter.convert(
            "500000 10500000",
            Direction.FORCE_UTM_TO_GEO,
            ZoneOverride(zone=30, hemisphere="S"),
        )

        assert not result.records
        assert result.failures[0].kind is ErrorKind.OUT_OF_PROJECTION_RANGE

    def test_records_round_trip(self, converter: CoordinateConverter) -> None:
        """Both sides of every UTM record are the same place."""
        text = "500000 0\n677438 4613252\n320000 8000000"
        result = converter.convert(text, Direction.FORCE_UTM_TO_GEO, ZoneOverride(zone=30, hemisphere="N"))

        assert len(result.records) == 3
        for record in result.records:
            back = convert(
                f"{record.geographic.latitude}, {record.geographic.longitude}",
                direction="geo_to_utm",
                zone=30,
                hemisphere="N",
            ).records[0].utm
            assert back.easting == pytest.approx(record.utm.easting, abs=0.01)
            assert back.northing == pytest.approx(record.utm.northing, abs=0.01)

    def test_hemisphere_only_override(self, converter: CoordinateConverter) -> None:
        """UTM input takes the zone from settings when only a hemisphere is given."""
        result = converter.convert("334000, 6252000", override=ZoneOverride(hemisphere="S"))

        assert result.records[0].utm.zone_label == "30S"
        assert result.records[0].geographic.latitude < 0


class TestForcedDirection:
    """Tests for forced conversion directions."""

    def test_forced_utm_accepts_ambiguous_values(self, converter: CoordinateConverter) -> None:
        """Values auto-detection refuses are converted when the direction is forced."""
        with pytest.raises(UndetectableFormatError):
            converter.convert("100, 5000000")

        result = converter.convert("100, 5000000", direction=Direction.FORCE_UTM_TO_GEO)

        assert result.detection.format is CoordinateFormat.UTM
        assert result.detection.separator is Separator.COMMA
        assert result.records[0].utm.easting == 100.0

    def test_forced_geo_on_utm_values(self, converter: CoordinateConverter) -> None:
        result = converter.convert("676000, 4610000", direction=Direction.FORCE_GEO_TO_UTM)

        assert result.failures[0].kind is ErrorKind.OUT_OF_PROJECTION_RANGE

    def test_forced_direction_never_raises_on_garbage(self, converter: CoordinateConverter) -> None:
        result = converter.convert("hello\nworld", direction="utm_to_geo")

        assert result.detection.separator is Separator.MIXED
        assert [f.kind for f in result.failures] == [ErrorKind.TOKEN_COUNT_MISMATCH] * 2

    def test_invalid_direction(self, converter: CoordinateConverter) -> None:
        with pytest.raises(ValueError):
            converter.convert("41.65, -0.87", direction="sideways")


class TestRoundTripThroughConverter:
    """Tests for converting back with the zone of a previous run."""

    def test_zone_context_round_trip(self, converter: CoordinateConverter) -> None:
        text = "41.651285, -0.869147\n41.652000, -0.870000\n41.660000, -0.880000"
        forward = converter.convert(text)

        utm_text = "\n".join(f"{u.easting}, {u.northing}" for u in forward.utm_points)
        backward = converter.convert(utm_text, override=forward.zone_context())

        for before, after in zip(forward.geographic_points, backward.geographic_points):
            assert after.latitude == pytest.approx(before.latitude, abs=1e-6)
            assert after.longitude == pytest.approx(before.longitude, abs=1e-6)

    def test_zone_context_empty(self, converter: CoordinateConverter) -> None:
        result = converter.convert("41.65, abc", direction=Direction.FORCE_GEO_TO_UTM)
        assert result.zone_context() is None

    def test_southern_zone_context(self, converter: CoordinateConverter) -> None:
        forward = converter.convert("-33.8688, 151.2093")
        assert forward.zone_context() == ZoneOverride(zone=56, hemisphere=Hemisphere.SOUTH)


class TestConvertFunction:
    """Tests for the module-level convenience function."""

    def test_auto(self) -> None:
        result = convert("41.65, -0.87")
        assert result.records[0].utm.zone == 30

    def test_zone_only(self) -> None:
        result = convert("41.65, -0.87\n-41.65, -0.87", direction="geo_to_utm", zone=31)
        assert [u.zone_label for u in result.utm_points] == ["31N", "31S"]

    def test_hemisphere_only(self) -> None:
        result = convert("41.65, -0.87\n41.65, 2.17", direction="geo_to_utm", hemisphere="N")
        assert [u.zone for u in result.utm_points] == [30, 31]

    def test_explicit_zone_and_hemisphere(self) -> None:
        result = convert("334000, 6252000", direction="utm_to_geo", zone=56, hemisphere="S")
        assert result.records[0].geographic.latitude < 0

    def test_to_dict(self) -> None:
        data = convert("41.65, -0.87\nbad").to_dict()

        assert data["detection"] == {"format": "latlon", "separator": "comma"}
        assert data["direction"] == "auto"
        assert data["outcomes"][0]["ok"] is True
        assert data["outcomes"][0]["utm"]["zone"] == 30
        assert data["outcomes"][1]["ok"] is False
        assert data["outcomes"][1]["kind"] == "token_count_mismatch"

    def test_failure_is_line_failure(self) -> None:
        result = convert("41.65, -0.87\nbad")
        assert isinstance(result.outcomes[1], LineFailure)
