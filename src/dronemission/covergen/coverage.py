"""
Coverage path generation for a single survey polygon.

compute_coverage is the engine's only entry point. It is a pure function of
its arguments: every accumulator lives for one call, nothing is cached
between calls except pyproj transformers, and identical inputs produce
identical outputs.
"""

import logging
from typing import Iterable, Tuple

from dronemission.covergen import constants
from dronemission.covergen.models import CoverageResult
from dronemission.covergen.polygon import validate_ring
from dronemission.covergen.spatial.lattice import generate_hex_lattice
from dronemission.covergen.spatial.path_optimizer import optimize_path
from dronemission.covergen.waypoints import (
    absolute_waypoints,
    cartesian_waypoints,
    check_invariants,
    fallback_points,
)

logger = logging.getLogger(__name__)


def compute_coverage(
    ring: Iterable,
    want_cartesian: bool,
    pitch: float = constants.DEFAULT_PITCH,
    threshold: float = constants.DEFAULT_THRESHOLD,
    cartesian_translation: Tuple[float, float] = (
        constants.DEFAULT_TRANSLATION_X,
        constants.DEFAULT_TRANSLATION_Y,
    ),
    altitude: float = constants.DEFAULT_ALTITUDE,
    max_candidates: int = constants.DEFAULT_MAX_CANDIDATES,
    cartesian_precision: int = constants.DEFAULT_CARTESIAN_PRECISION,
) -> CoverageResult:
    """
    Compute an ordered set of waypoints covering a polygon.

    Args:
        ring: (lat, lon) positions of the polygon boundary; it may or may not
            repeat its first point at the end
        want_cartesian: also produce flat-earth waypoints for the vehicle's
            local frame
        pitch: hexagonal lattice spacing in meters
        threshold: minimum fraction of a boundary point's disc that must lie
            inside the polygon
        cartesian_translation: (x, y) offset in meters applied to cartesian
            waypoints
        altitude: flight altitude assigned to every waypoint
        max_candidates: lattice candidate count after which generation stops
        cartesian_precision: decimals kept on cartesian x and y

    Returns:
        CoverageResult with at least one absolute waypoint

    Raises:
        InvalidPolygon: the ring is malformed
        InvalidGeometry: the polygon's bounding box, centroid or projection
            is not finite
        ValueError: pitch is not positive, or threshold is not within [0, 1]
    """
    if not pitch > 0:
        raise ValueError(f"Lattice pitch must be positive, got {pitch}")
    if not 0 <= threshold <= 1:
        raise ValueError(f"Coverage threshold must be between 0 and 1, got {threshold}")

    closed_ring = validate_ring(ring)
    logger.info(f"Computing coverage for a polygon with {len(closed_ring) - 1} vertices")

    lattice = generate_hex_lattice(closed_ring, pitch, threshold, max_candidates)

    if lattice.rows:
        path = optimize_path(lattice.rows)
        fallback = False
    else:
        logger.info("No lattice points inside the polygon, using its vertices")
        path = fallback_points(closed_ring)
        fallback = True

    absolute = absolute_waypoints(path, altitude)
    cartesian = []
    if want_cartesian:
        cartesian = cartesian_waypoints(absolute, cartesian_translation, cartesian_precision)

    result = CoverageResult(absolute, cartesian, lattice.truncated, fallback)
    check_invariants(result)

    logger.info(f"Absolute waypoints: {len(result.absolute)}")
    logger.info(f"Cartesian waypoints: {len(result.cartesian)}")
    return result
