"""
Assembly of optimized paths into absolute and cartesian waypoints.
"""

import logging
import math
from typing import List, Sequence, Tuple

from returns.maybe import Maybe

from dronemission.covergen import constants
from dronemission.covergen.models import (
    AbsoluteWaypoint,
    CartesianWaypoint,
    CoverageResult,
    GeoPoint,
    InvalidGeometry,
)
from dronemission.covergen.polygon import open_ring
from dronemission.covergen.spatial.projection import apply_translation, to_cartesian

logger = logging.getLogger(__name__)


def absolute_waypoints(
    points: Sequence[GeoPoint], altitude: float = constants.DEFAULT_ALTITUDE
) -> List[AbsoluteWaypoint]:
    return [
        AbsoluteWaypoint(index + 1, point.lat, point.lon, altitude)
        for index, point in enumerate(points)
    ]


def fallback_points(ring: Sequence[GeoPoint]) -> List[GeoPoint]:
    """The polygon's own vertices, in input order, without the closing duplicate."""
    return list(open_ring(ring))


def cartesian_waypoints(
    absolute: Sequence[AbsoluteWaypoint],
    translation: Tuple[float, float] = (
        constants.DEFAULT_TRANSLATION_X,
        constants.DEFAULT_TRANSLATION_Y,
    ),
    precision: int = constants.DEFAULT_CARTESIAN_PRECISION,
    reference: Maybe[GeoPoint] = Maybe.empty,
) -> List[CartesianWaypoint]:
    """
    Flat-earth waypoints anchored at the first absolute waypoint, shifted by
    the calibration translation.
    """
    translation_x, translation_y = translation
    return apply_translation(
        to_cartesian(absolute, reference, precision), translation_x, translation_y
    )


def check_invariants(result: CoverageResult) -> CoverageResult:
    """
    Raises InvalidGeometry unless the result is complete and consistent.
    """
    absolute = result.absolute
    if not absolute:
        raise InvalidGeometry("No waypoints were produced")

    if [w.id for w in absolute] != list(range(1, len(absolute) + 1)):
        raise InvalidGeometry("Waypoint ids are not a contiguous 1..N sequence")

    if result.cartesian:
        if len(result.cartesian) != len(absolute):
            raise InvalidGeometry(
                f"{len(result.cartesian)} cartesian waypoints for {len(absolute)} absolute ones"
            )
        if [w.id for w in result.cartesian] != [w.id for w in absolute]:
            raise InvalidGeometry("Cartesian waypoint ids do not match absolute ones")

    values = [v for w in absolute for v in (w.lat, w.lng, w.alt)]
    values += [v for w in result.cartesian for v in (w.x, w.y, w.z)]
    if not all(math.isfinite(v) for v in values):
        raise InvalidGeometry("Waypoints contain non-finite coordinates")

    return result
