"""
Hexagonal lattice sampling of a survey polygon.

The lattice is laid out in the polygon's UTM plane so that its pitch is in
meters. Each candidate is projected back to WGS84 and kept when it lies
strictly inside the polygon, or when a disc of radius `pitch` around it
overlaps the polygon by at least `threshold` of the disc's area.

Generation stops after the row in which the number of evaluated candidates
exceeds `max_candidates`, keeping everything accepted so far.
"""

import logging
import math

import shapely
from shapely.errors import GEOSException

from dronemission.covergen import constants
from dronemission.covergen.models import GeoPoint, LatticeResult, PointVerdict
from dronemission.covergen.polygon import to_polygon
from dronemission.covergen.spatial.geometry import (
    bounding_box,
    contains_strictly,
    overlap_verdict,
    vertex_centroid,
)
from dronemission.covergen.spatial.projection import PlanarFrame, zone_for

logger = logging.getLogger(__name__)


def generate_hex_lattice(
    ring,
    pitch: float = constants.DEFAULT_PITCH,
    threshold: float = constants.DEFAULT_THRESHOLD,
    max_candidates: int = constants.DEFAULT_MAX_CANDIDATES,
) -> LatticeResult:
    """
    Sample a closed ring with a hexagonal lattice.

    Args:
        ring: closed sequence of GeoPoints, as returned by validate_ring
        pitch: lattice spacing parameter r, in meters
        threshold: minimum disc overlap ratio for points outside the polygon
        max_candidates: candidate count after which generation stops

    Returns:
        LatticeResult whose rows hold only accepted points, in generation
        order; rows without accepted points are dropped

    Raises:
        InvalidGeometry: the bounding box, centroid or projection is not finite
    """
    logger.debug(f"Generating hexagonal lattice with pitch {pitch} m")

    polygon = to_polygon(ring)
    shapely.prepare(polygon)
    min_lon, min_lat, max_lon, max_lat = bounding_box(polygon)

    zone = zone_for(vertex_centroid(ring))
    frame = PlanarFrame(zone)
    logger.debug(f"Bounding box {(min_lon, min_lat, max_lon, max_lat)} in {zone.epsg}")

    min_x, min_y = frame.to_planar(min_lon, min_lat)
    max_x, max_y = frame.to_planar(max_lon, max_lat)

    dx = math.sqrt(3) * pitch
    dy = 1.5 * pitch

    rows = []
    removed = []
    candidates = 0
    truncated = False

    y = min_y - pitch
    row = 0
    while y <= max_y + pitch:
        x_offset = dx / 2 if row % 2 == 1 else 0
        x = min_x - pitch + x_offset
        current_row = []

        while x <= max_x + pitch:
            candidates += 1
            lon, lat = frame.to_geographic(x, y)
            point = GeoPoint(lat, lon)

            if _candidate_verdict(frame, polygon, point, x, y, pitch, threshold).accepted:
                current_row.append(point)
            else:
                removed.append(point)
            x += dx

        if current_row:
            rows.append(current_row)

        y += dy
        row += 1

        if candidates > max_candidates:
            truncated = y <= max_y + pitch
            if truncated:
                logger.warning(
                    f"Lattice generation stopped early: more than {max_candidates} candidates"
                )
            break

    logger.debug(
        f"Lattice has {len(rows)} rows from {candidates} candidates, {len(removed)} removed"
    )
    return LatticeResult(rows, removed, candidates, truncated, zone)


def _candidate_verdict(frame, polygon, point, x, y, pitch, threshold) -> PointVerdict:
    if contains_strictly(polygon, point.lon, point.lat):
        return PointVerdict.accept()

    try:
        circle = frame.buffer(x, y, pitch)
    except (GEOSException, ValueError) as e:
        return PointVerdict.reject(f"buffer failed: {e}")
    return overlap_verdict(polygon, circle, threshold)
