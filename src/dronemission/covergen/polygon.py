"""
Validation and normalization of polygon rings.

A ring arrives from the parsing collaborator as an ordered sequence of
(latitude, longitude) positions. Validation checks the point count and that
every coordinate is a finite real number; normalization closes the ring by
appending its first point when the last one differs.
"""

import logging
from numbers import Real
from typing import Iterable, Tuple

import numpy as np
from shapely.geometry import Polygon

from dronemission.covergen.models import GeoPoint, InvalidPolygon

logger = logging.getLogger(__name__)

Ring = Tuple[GeoPoint, ...]


def validate_ring(ring: Iterable) -> Ring:
    """
    Validate a polygon ring and return it closed.

    Args:
        ring: GeoPoints, (lat, lon) pairs or mappings with 'lat' and 'lon'

    Returns:
        A new tuple of GeoPoints whose last point equals its first

    Raises:
        InvalidPolygon: fewer than 3 points, a coordinate that is not a
            finite number, or fewer than 4 vertices once closed
    """
    if ring is None:
        raise InvalidPolygon("Polygon coordinates are missing")

    points = [_as_geo_point(index, item) for index, item in enumerate(ring)]

    if len(points) < 3:
        raise InvalidPolygon(
            f"Invalid polygon: at least 3 coordinates are required, found {len(points)}"
        )

    closed = close_ring(points)
    if len(closed) < 4:
        raise InvalidPolygon(
            f"Invalid polygon: closed ring has {len(closed)} vertices, at least 4 are required"
        )

    logger.debug(f"Validated ring with {len(points)} coordinates")
    return closed


def close_ring(points) -> Ring:
    points = tuple(points)
    if points[0] != points[-1]:
        points = points + (points[0],)
    return points


def open_ring(ring) -> Ring:
    """Returns the ring without its closing duplicate, if it has one."""
    ring = tuple(ring)
    if len(ring) > 1 and ring[0] == ring[-1]:
        return ring[:-1]
    return ring


def to_polygon(ring) -> Polygon:
    """Returns a shapely Polygon in (lon, lat) axis order."""
    return Polygon([(p.lon, p.lat) for p in ring])


def _as_geo_point(index, item) -> GeoPoint:
    if isinstance(item, GeoPoint):
        lat, lon = item.lat, item.lon
    elif isinstance(item, dict):
        lat, lon = item.get("lat"), item.get("lon")
    else:
        try:
            lat, lon = item
        except (TypeError, ValueError):
            raise InvalidPolygon(f"Invalid coordinate at position {index}: {item!r}")

    if not (_is_number(lat) and _is_number(lon)):
        raise InvalidPolygon(
            f"Invalid coordinate at position {index}: lat={lat!r}, lon={lon!r}"
        )

    try:
        lat, lon = float(lat), float(lon)
    except (OverflowError, TypeError, ValueError):
        raise InvalidPolygon(
            f"Invalid coordinate at position {index}: value out of range"
        )

    if not np.isfinite([lat, lon]).all():
        raise InvalidPolygon(
            f"Invalid coordinate at position {index}: lat={lat}, lon={lon}"
        )

    return GeoPoint(lat, lon)


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)
