"""
Tests for hexagonal lattice generation.

The reference rectangle is about 30 m by 30 m and starts on zone 32's
central meridian, so with a 3 m pitch its lattice columns and rows fall at
known offsets from the polygon's edges.
"""

import pytest

from dronemission.covergen.models import GeoPoint, UtmZone
from dronemission.covergen.polygon import validate_ring
from dronemission.covergen.spatial.lattice import generate_hex_lattice


@pytest.fixture
def rectangle():
    return validate_ring([
        (45.0, 9.0),
        (45.0, 9.00038),
        (45.00027, 9.00038),
        (45.00027, 9.0),
    ])


@pytest.fixture
def large_square():
    """About 1.1 km by 0.8 km."""
    return validate_ring([
        (45.0, 9.0),
        (45.0, 9.01),
        (45.01, 9.01),
        (45.01, 9.0),
    ])


@pytest.fixture
def tiny_triangle():
    """Under a meter across, much smaller than the default pitch."""
    return validate_ring([
        (45.0, 9.0),
        (45.0, 9.00001),
        (45.000005, 9.000005),
    ])


class TestRectangle:

    def test_zone(self, rectangle):
        assert generate_hex_lattice(rectangle).zone == UtmZone(32, False)

    def test_row_lengths_alternate(self, rectangle):
        lattice = generate_hex_lattice(rectangle)
        assert [len(row) for row in lattice.rows] == [7, 6, 7, 6, 7, 6, 7]

    def test_row_counts_are_symmetric(self, rectangle):
        lengths = [len(row) for row in generate_hex_lattice(rectangle).rows]
        assert max(lengths) - min(lengths) <= 1

    def test_candidates_are_accounted_for(self, rectangle):
        lattice = generate_hex_lattice(rectangle)
        accepted = sum(len(row) for row in lattice.rows)
        assert lattice.candidates == 56
        assert accepted + len(lattice.removed) == lattice.candidates

    def test_not_truncated(self, rectangle):
        assert not generate_hex_lattice(rectangle).truncated

    def test_rows_run_south_to_north(self, rectangle):
        rows = generate_hex_lattice(rectangle).rows
        latitudes = [row[0].lat for row in rows]
        assert latitudes == sorted(latitudes)

    def test_rows_are_in_generation_order(self, rectangle):
        for row in generate_hex_lattice(rectangle).rows:
            longitudes = [p.lon for p in row]
            assert longitudes == sorted(longitudes)

    def test_points_stay_near_the_polygon(self, rectangle):
        for row in generate_hex_lattice(rectangle).rows:
            for point in row:
                assert isinstance(point, GeoPoint)
                assert 44.99997 < point.lat < 45.0003
                assert 8.99996 < point.lon < 9.00042

    def test_higher_threshold_drops_boundary_points(self, rectangle):
        lattice = generate_hex_lattice(rectangle, threshold=0.9)
        assert [len(row) for row in lattice.rows] == [5, 6, 5, 6, 5, 6, 5]

    def test_deterministic(self, rectangle):
        assert generate_hex_lattice(rectangle) == generate_hex_lattice(rectangle)


class TestCandidateCap:

    def test_large_polygon_is_truncated(self, large_square):
        lattice = generate_hex_lattice(large_square)
        assert lattice.truncated
        assert lattice.candidates > 500
        assert lattice.rows

    def test_generation_stops_after_the_row_exceeding_the_cap(self, large_square):
        lattice = generate_hex_lattice(large_square)
        per_row = lattice.candidates // 4
        assert lattice.candidates - per_row <= 500

    def test_custom_cap(self, rectangle):
        lattice = generate_hex_lattice(rectangle, max_candidates=10)
        assert lattice.truncated
        assert lattice.candidates == 14

    def test_cap_reached_on_the_last_row_is_not_truncation(self, rectangle):
        lattice = generate_hex_lattice(rectangle, max_candidates=55)
        assert not lattice.truncated
        assert lattice.candidates == 56


class TestSmallPolygons:

    def test_no_rows_for_polygon_smaller_than_pitch(self, tiny_triangle):
        lattice = generate_hex_lattice(tiny_triangle)
        assert lattice.rows == []
        assert lattice.candidates > 0
        assert len(lattice.removed) == lattice.candidates

    def test_empty_rows_are_dropped(self, rectangle):
        lattice = generate_hex_lattice(rectangle)
        assert all(lattice.rows)
