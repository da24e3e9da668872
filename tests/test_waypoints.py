import math

import pytest

from dronemission.covergen.models import (
    AbsoluteWaypoint,
    CartesianWaypoint,
    CoverageResult,
    GeoPoint,
    InvalidGeometry,
)
from dronemission.covergen.waypoints import (
    absolute_waypoints,
    cartesian_waypoints,
    check_invariants,
    fallback_points,
)

# Unit tests for the 'waypoints' module functions.


@pytest.fixture
def path():
    return [GeoPoint(45.0, 9.0), GeoPoint(45.0001, 9.0), GeoPoint(45.0001, 9.0001)]


@pytest.fixture
def absolute(path):
    return absolute_waypoints(path)


def test_ids_follow_path_order(absolute):
    assert [w.id for w in absolute] == [1, 2, 3]


def test_absolute_waypoints_copy_coordinates(path, absolute):
    assert absolute[2] == AbsoluteWaypoint(3, 45.0001, 9.0001, 3.5)


def test_custom_altitude(path):
    assert {w.alt for w in absolute_waypoints(path, 10.0)} == {10.0}


def test_fallback_points_drop_closing_duplicate():
    a, b, c = GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)
    assert fallback_points((a, b, c, a)) == [a, b, c]


def test_fallback_points_keep_input_order():
    a, b, c = GeoPoint(1, 1), GeoPoint(0, 0), GeoPoint(0, 1)
    assert fallback_points((a, b, c)) == [a, b, c]


def test_first_cartesian_waypoint_is_the_translation(absolute):
    cartesian = cartesian_waypoints(absolute)
    assert cartesian[0] == CartesianWaypoint(1, 3.0, 3.0, 3.5)


def test_cartesian_waypoints_custom_translation(absolute):
    cartesian = cartesian_waypoints(absolute, (0.0, -1.5))
    assert cartesian[0] == CartesianWaypoint(1, 0.0, -1.5, 3.5)
    assert cartesian[1].y == pytest.approx(11.12 - 1.5)


def test_cartesian_waypoints_match_absolute(absolute):
    cartesian = cartesian_waypoints(absolute)
    assert [w.id for w in cartesian] == [w.id for w in absolute]


def test_invariants_hold(absolute):
    result = CoverageResult(absolute, cartesian_waypoints(absolute))
    assert check_invariants(result) is result


def test_empty_result_violates_invariants():
    with pytest.raises(InvalidGeometry):
        check_invariants(CoverageResult([], []))


def test_gap_in_ids_violates_invariants(absolute):
    absolute[1] = AbsoluteWaypoint(5, 45.0, 9.0, 3.5)
    with pytest.raises(InvalidGeometry, match="contiguous"):
        check_invariants(CoverageResult(absolute))


def test_length_mismatch_violates_invariants(absolute):
    cartesian = cartesian_waypoints(absolute)[:2]
    with pytest.raises(InvalidGeometry):
        check_invariants(CoverageResult(absolute, cartesian))


def test_non_finite_coordinate_violates_invariants(absolute):
    absolute[0] = AbsoluteWaypoint(1, math.nan, 9.0, 3.5)
    with pytest.raises(InvalidGeometry, match="non-finite"):
        check_invariants(CoverageResult(absolute))
