"""
Tests for map framing of converted points.
"""

import pytest

from coordsuite.core.visualization.map_view import (
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    SINGLE_POINT_ZOOM,
    TILE_WIDTHS,
    BoundingBox,
    MapView,
    calculate_zoom_level,
    compute_bounds,
    compute_map_view,
)
from coordsuite.models.coordinates import GeographicPoint


def _points(*pairs):
    return [GeographicPoint(latitude=lat, longitude=lon) for lat, lon in pairs]


class TestBoundingBox:
    """Tests for BoundingBox."""

    def test_properties(self) -> None:
        bbox = BoundingBox(min_lat=41.0, min_lon=-1.0, max_lat=42.0, max_lon=1.0)

        assert bbox.width == 2.0
        assert bbox.height == 1.0
        assert bbox.center == (41.5, 0.0)
        assert bbox.contains(41.5, 0.5)
        assert not bbox.contains(43.0, 0.0)

    def test_invalid(self) -> None:
        with pytest.raises(ValueError, match="min_lat"):
            BoundingBox(min_lat=42.0, min_lon=0.0, max_lat=41.0, max_lon=1.0)
        with pytest.raises(ValueError, match="min_lon"):
            BoundingBox(min_lat=41.0, min_lon=2.0, max_lat=42.0, max_lon=1.0)

    def test_to_dict(self) -> None:
        bbox = BoundingBox(min_lat=1.0, min_lon=2.0, max_lat=3.0, max_lon=4.0)
        assert bbox.to_dict() == {"min_lat": 1.0, "min_lon": 2.0, "max_lat": 3.0, "max_lon": 4.0}


class TestComputeBounds:
    """Tests for compute_bounds."""

    def test_bounds(self) -> None:
        bbox = compute_bounds(_points((41.65, -0.87), (41.70, -0.80), (41.60, -0.90)))

        assert bbox.min_lat == pytest.approx(41.60)
        assert bbox.max_lat == pytest.approx(41.70)
        assert bbox.min_lon == pytest.approx(-0.90)
        assert bbox.max_lon == pytest.approx(-0.80)

    def test_empty(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            compute_bounds([])


class TestZoomLevel:
    """Tests for calculate_zoom_level."""

    def test_single_point(self) -> None:
        assert calculate_zoom_level(_points((41.65, -0.87))) == SINGLE_POINT_ZOOM

    def test_no_points(self) -> None:
        assert calculate_zoom_level([]) == SINGLE_POINT_ZOOM

    def test_city_extent(self) -> None:
        """About 0.1 degrees padded to 0.13 fits at level 12."""
        points = _points((41.60, -0.90), (41.70, -0.85))
        assert calculate_zoom_level(points) == 12

    def test_country_extent(self) -> None:
        points = _points((36.0, -9.0), (43.5, 3.0))
        assert calculate_zoom_level(points) == 5

    def test_world_extent(self) -> None:
        points = _points((-60.0, -170.0), (70.0, 170.0))
        assert calculate_zoom_level(points) == 0

    def test_coincident_points(self) -> None:
        """Identical points get the deepest level."""
        points = _points((41.65, -0.87), (41.65, -0.87))
        assert calculate_zoom_level(points) == len(TILE_WIDTHS) - 1

    def test_zoom_decreases_with_extent(self) -> None:
        small = calculate_zoom_level(_points((41.0, 0.0), (41.01, 0.01)))
        large = calculate_zoom_level(_points((41.0, 0.0), (42.0, 1.0)))
        assert small > large


class TestComputeMapView:
    """Tests for compute_map_view."""

    def test_empty_default_view(self) -> None:
        view = compute_map_view([])

        assert isinstance(view, MapView)
        assert (view.center_lat, view.center_lon) == DEFAULT_CENTER
        assert view.zoom == DEFAULT_ZOOM
        assert view.bounds is None
        assert view.to_dict()["bounds"] is None

    def test_center_is_mean(self) -> None:
        view = compute_map_view(_points((41.0, -1.0), (42.0, 0.0), (42.0, 2.0)))

        assert view.center_lat == pytest.approx(125 / 3, abs=1e-9)
        assert view.center_lon == pytest.approx(1 / 3, abs=1e-9)
        assert view.bounds.max_lon == pytest.approx(2.0)

    def test_to_dict(self) -> None:
        data = compute_map_view(_points((41.65, -0.87))).to_dict()

        assert data["center_lat"] == pytest.approx(41.65)
        assert data["center_lon"] == pytest.approx(-0.87)
        assert data["zoom"] == SINGLE_POINT_ZOOM
        assert data["bounds"]["min_lat"] == pytest.approx(41.65)
