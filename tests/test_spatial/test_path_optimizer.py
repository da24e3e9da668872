"""
Tests for the serpentine path ordering.

Points are built on a synthetic grid where the latitude is the row number
and the longitude the column, so expected orders read as (row, column).
"""

import pytest

from dronemission.covergen.models import GeoPoint
from dronemission.covergen.spatial.path_optimizer import (
    by_longitude,
    interleave_rows,
    optimize_path,
)


def p(row, col):
    return GeoPoint(float(row), float(col))


def make_rows(*lengths):
    return [[p(r, c) for c in range(1, n + 1)] for r, n in enumerate(lengths)]


def cells(path):
    return [(int(point.lat), int(point.lon)) for point in path]


class TestOptimizePath:

    def test_empty(self):
        assert optimize_path([]) == []

    def test_single_row(self):
        rows = [[p(0, 3), p(0, 1), p(0, 2)]]
        assert cells(optimize_path(rows)) == [(0, 2), (0, 3), (0, 1)]

    def test_single_point_row(self):
        assert cells(optimize_path([[p(0, 1)]])) == [(0, 1)]

    def test_two_rows_alternate(self):
        path = optimize_path(make_rows(3, 3))
        assert cells(path) == [
            (0, 2), (0, 3),
            (1, 3), (1, 2),
            (1, 1), (0, 1),
        ]

    def test_four_rows_defer_most_recent_first(self):
        path = optimize_path(make_rows(2, 2, 2, 2))
        assert cells(path) == [
            (0, 2), (1, 2), (2, 2), (3, 2),
            (3, 1), (2, 1), (1, 1), (0, 1),
        ]

    def test_odd_rows_interleave_the_last_pair(self):
        path = optimize_path(make_rows(4, 3, 3))
        assert cells(path) == [
            (0, 2), (0, 3), (0, 4),
            (1, 3), (2, 3), (1, 2), (2, 2), (2, 1),
            (1, 1), (0, 1),
        ]

    def test_interleave_length_and_placement(self):
        rows = make_rows(4, 3, 3)
        path = optimize_path(rows)
        assert len(path) == sum(len(row) for row in rows)

        row_one_main = [p(0, 2), p(0, 3), p(0, 4)]
        last_of_row_one = max(path.index(point) for point in row_one_main)
        for point in rows[1] + rows[2]:
            assert path.index(point) > last_of_row_one

    def test_interleave_with_longer_first_row(self):
        path = optimize_path(make_rows(2, 2, 2, 4, 2))
        assert cells(path) == [
            (0, 2), (1, 2), (2, 2),
            (3, 4), (4, 2), (3, 3), (4, 1), (3, 2),
            (3, 1), (2, 1), (1, 1), (0, 1),
        ]

    def test_interleave_with_single_point_first_row(self):
        path = optimize_path(make_rows(2, 1, 3))
        assert cells(path) == [
            (0, 2),
            (2, 3), (2, 2), (2, 1),
            (1, 1), (0, 1),
        ]

    def test_rows_are_sorted_before_ordering(self):
        rows = [[p(0, 3), p(0, 1), p(0, 2)], [p(1, 2), p(1, 3), p(1, 1)]]
        assert cells(optimize_path(rows)) == [
            (0, 2), (0, 3),
            (1, 3), (1, 2),
            (1, 1), (0, 1),
        ]

    def test_no_point_is_dropped_or_duplicated(self):
        rows = make_rows(5, 4, 5, 4, 5, 4, 5)
        path = optimize_path(rows)
        assert len(path) == len(set(path)) == sum(len(row) for row in rows)
        assert set(path) == {point for row in rows for point in row}

    def test_input_rows_are_not_modified(self):
        rows = [[p(0, 3), p(0, 1), p(0, 2)]]
        optimize_path(rows)
        assert cells(rows[0]) == [(0, 3), (0, 1), (0, 2)]

    def test_deterministic(self):
        rows = make_rows(6, 5, 6, 5, 6)
        assert optimize_path(rows) == optimize_path(rows)


class TestHelpers:

    def test_sort_is_stable_on_ties(self):
        a = GeoPoint(0.1, 1.0)
        b = GeoPoint(0.2, 1.0)
        c = GeoPoint(0.0, 0.5)
        assert by_longitude([a, b, c]) == [c, a, b]
        assert by_longitude([b, a, c]) == [c, b, a]

    @pytest.mark.parametrize("first, second, expected", [
        ([1, 2], [1, 2], [(0, 2), (1, 2), (0, 1), (1, 1)]),
        ([1, 2, 3], [1], [(0, 3), (1, 1), (0, 2), (0, 1)]),
        ([], [1, 2], [(1, 2), (1, 1)]),
    ])
    def test_interleave_rows(self, first, second, expected):
        row1 = [p(0, c) for c in first]
        row2 = [p(1, c) for c in second]
        assert cells(interleave_rows(row1, row2)) == expected
