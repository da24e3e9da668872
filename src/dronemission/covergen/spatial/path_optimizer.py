"""
Ordering of lattice rows into a single flight path.

The path is a serpentine sweep: each row is sorted west to east and flown
in alternating directions. The westernmost point of each row is held back
and flown at the end, most recently held first, which brings the vehicle
back toward where it started. When the number of rows is odd the final two
rows are flown together, alternating between them from their eastern ends.

The ordering is consumed by flight scripts that expect it to be exactly
reproducible; any change here changes every generated mission.
"""

import logging
from typing import List, Sequence

from funcy import interleave, lcat

from dronemission.covergen.models import GeoPoint

logger = logging.getLogger(__name__)


def by_longitude(row: Sequence[GeoPoint]) -> List[GeoPoint]:
    return sorted(row, key=lambda p: p.lon)


def optimize_path(rows: Sequence[Sequence[GeoPoint]]) -> List[GeoPoint]:
    """
    Flatten lattice rows into one travel order.

    Args:
        rows: non-empty rows in generation (south to north) order

    Returns:
        every input point exactly once, in flight order
    """
    logger.debug(f"Optimizing path over {len(rows)} rows")

    path = []
    deferred = []
    total_rows = len(rows)

    interleave_last_pair = total_rows % 2 == 1 and total_rows >= 2
    normal_rows = rows[:-2] if interleave_last_pair else rows

    for index, row in enumerate(normal_rows):
        if not row:
            continue
        ordered = by_longitude(row)
        main = ordered[1:]
        path.extend(main if index % 2 == 0 else main[::-1])
        deferred.insert(0, ordered[0])

    if interleave_last_pair:
        first = by_longitude(rows[-2])
        second = by_longitude(rows[-1])
        path.extend(interleave_rows(first[1:], second))
        deferred.insert(0, first[0])

    path.extend(deferred)

    logger.debug(f"Optimized path has {len(path)} waypoints")
    return path


def interleave_rows(first: List[GeoPoint], second: List[GeoPoint]) -> List[GeoPoint]:
    """
    Alternate between two west-to-east rows starting from their eastern ends.

    Whatever remains of the longer row is appended east to west.
    """
    paired = list(interleave(reversed(first), reversed(second)))
    common = min(len(first), len(second))
    if len(first) > len(second):
        tail = first[:len(first) - common][::-1]
    else:
        tail = second[:len(second) - common][::-1]
    return lcat([paired, tail])
