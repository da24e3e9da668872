"""
Geometry primitives shared by the lattice generator.

Polygons here are shapely geometries in geographic (lon, lat) axis order.
Areas are measured on the WGS84 ellipsoid so that overlap ratios are in
true square meters regardless of latitude.
"""

import logging
from typing import Tuple

import numpy as np
from pyproj import Geod
from shapely.errors import GEOSException
from shapely.geometry import Point, Polygon

from dronemission.covergen.models import GeoPoint, InvalidGeometry, PointVerdict

logger = logging.getLogger(__name__)

GEOD = Geod(ellps="WGS84")


def ensure_finite(values, what):
    """Raise InvalidGeometry unless every value is a finite number."""
    if not np.isfinite(np.asarray(values, dtype=float)).all():
        raise InvalidGeometry(f"{what} produced non-finite values: {values}")


def bounding_box(polygon: Polygon) -> Tuple[float, float, float, float]:
    """Returns (min_lon, min_lat, max_lon, max_lat)."""
    bbox = polygon.bounds
    ensure_finite(bbox, "Bounding box")
    return bbox


def vertex_centroid(ring) -> GeoPoint:
    """
    Mean position of the ring's distinct vertices.

    The closing duplicate, if present, is not counted twice.
    """
    ring = list(ring)
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring = ring[:-1]
    if not ring:
        raise InvalidGeometry("Centroid of an empty ring")

    lat, lon = np.mean([(p.lat, p.lon) for p in ring], axis=0)
    ensure_finite((lat, lon), "Centroid")
    return GeoPoint(float(lat), float(lon))


def contains_strictly(polygon, lon: float, lat: float) -> bool:
    """
    True when the position lies in the polygon's interior.

    `polygon` may be a shapely Polygon or a prepared geometry.
    """
    return polygon.contains(Point(lon, lat))


def geodesic_area(geometry) -> float:
    """
    Ellipsoidal area, in square meters, of the polygonal parts of a geometry.
    """
    if geometry.is_empty:
        return 0.0
    if geometry.geom_type == "Polygon":
        parts = [geometry]
    elif hasattr(geometry, "geoms"):
        parts = [g for g in geometry.geoms if g.geom_type == "Polygon"]
    else:
        parts = []
    return sum(abs(GEOD.geometry_area_perimeter(part)[0]) for part in parts)


def overlap_verdict(polygon: Polygon, circle: Polygon, threshold: float) -> PointVerdict:
    """
    Decide whether a disc covers enough of the polygon to keep its center.

    The disc is kept when the area shared with the polygon is at least
    `threshold` of the disc's own area. A failed or empty intersection
    rejects the point; it is never an error.
    """
    try:
        if circle.is_empty or not circle.is_valid:
            return PointVerdict.reject("invalid buffer")

        intersection = circle.intersection(polygon)
        if intersection.is_empty:
            return PointVerdict.reject("no intersection")

        intersection_area = geodesic_area(intersection)
        circle_area = geodesic_area(circle)
    except (GEOSException, ValueError) as e:
        logger.debug(f"Intersection failed: {e}")
        return PointVerdict.reject(f"intersection failed: {e}")

    if not np.isfinite([intersection_area, circle_area]).all():
        return PointVerdict.reject("non-finite area")
    if intersection_area <= 0 or circle_area <= 0:
        return PointVerdict.reject("zero area")

    ratio = intersection_area / circle_area
    if ratio >= threshold:
        return PointVerdict.accept(ratio)
    return PointVerdict.reject("coverage below threshold", ratio)
