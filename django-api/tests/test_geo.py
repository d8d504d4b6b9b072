"""Unit tests for great-circle proximity.

Run with: pytest tests/test_geo.py -v
"""

import pytest

from catalog.domain import GeoPoint
from catalog.domain.geo import bounding_box, find_within_radius, haversine_km

ORIGIN = GeoPoint(0, 0)


def _position(point: GeoPoint):
    return point.latitude, point.longitude


class TestHaversine:
    """Tests for haversine_km."""

    def test_same_point_is_zero(self):
        assert haversine_km(ORIGIN, ORIGIN) == 0

    def test_one_degree_on_the_equator(self):
        """One degree of longitude at the equator is about 111.19 km."""
        assert haversine_km(ORIGIN, GeoPoint(0, 1)) == pytest.approx(111.19, abs=0.01)

    def test_is_symmetric(self):
        london, paris = GeoPoint(51.5074, -0.1278), GeoPoint(48.8566, 2.3522)
        assert haversine_km(london, paris) == pytest.approx(haversine_km(paris, london))
        assert haversine_km(london, paris) == pytest.approx(343.5, abs=1)

    def test_antipodes_are_half_the_circumference(self):
        assert haversine_km(ORIGIN, GeoPoint(0, 180)) == pytest.approx(20015.09, abs=0.1)


class TestFindWithinRadius:
    """Tests for find_within_radius."""

    def test_excludes_points_beyond_radius(self):
        """(0, 1) is ~111 km from the origin and falls outside 10 km."""
        near, far = GeoPoint(0, 0.05), GeoPoint(0, 1)
        assert find_within_radius(ORIGIN, 10, [far, near], _position) == [near]

    def test_orders_nearest_first(self):
        points = [GeoPoint(0, 0.08), GeoPoint(0, 0.01), GeoPoint(0, 0.04)]
        result = find_within_radius(ORIGIN, 50, points, _position)
        assert result == [points[1], points[2], points[0]]

    def test_ties_keep_input_order(self):
        north, south = GeoPoint(0.05, 0), GeoPoint(-0.05, 0)
        assert find_within_radius(ORIGIN, 10, [north, south], _position) == [north, south]
        assert find_within_radius(ORIGIN, 10, [south, north], _position) == [south, north]

    def test_skips_candidates_without_coordinates(self):
        """A candidate missing either coordinate is never matched."""
        candidates = [("no-lat", None, 0.0), ("no-lon", 0.0, None), ("here", 0.0, 0.0)]
        result = find_within_radius(ORIGIN, 10, candidates, lambda c: (c[1], c[2]))
        assert [name for name, _, _ in result] == ["here"]

    def test_radius_boundary_is_inclusive(self):
        edge = GeoPoint(0, 1)
        assert find_within_radius(ORIGIN, haversine_km(ORIGIN, edge), [edge], _position) == [edge]


class TestBoundingBox:
    """Tests for bounding_box."""

    def test_box_contains_every_point_in_radius(self):
        """Points on the circle in all four directions lie inside the box."""
        center = GeoPoint(51.5, -0.12)
        box = bounding_box(center, 25)
        for point in (GeoPoint(51.72, -0.12), GeoPoint(51.28, -0.12),
                      GeoPoint(51.5, 0.23), GeoPoint(51.5, -0.47)):
            assert haversine_km(center, point) <= 25
            assert box.contains(point.latitude, point.longitude)

    def test_box_excludes_distant_points(self):
        box = bounding_box(ORIGIN, 10)
        assert not box.contains(0, 1)
        assert not box.contains(1, 0)

    def test_antimeridian_drops_longitude_bounds(self):
        box = bounding_box(GeoPoint(0, 179.95), 50)
        assert box.min_longitude is None and box.max_longitude is None
        assert box.contains(0, -179.9)

    def test_near_pole_drops_longitude_bounds(self):
        box = bounding_box(GeoPoint(89.9, 0), 50)
        assert box.max_latitude == 90.0
        assert box.min_longitude is None
        assert box.contains(89.95, 120)
