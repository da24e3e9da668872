"""
Coordinate transforms used by the coverage engine.

Two unrelated frames live here:

1. A UTM plane chosen once per polygon from its centroid. All lattice
   spacing and disc buffering happens in this metric frame; points are
   projected back to WGS84 before they are tested against the polygon.

2. A flat-earth cartesian frame anchored at a reference waypoint, used to
   express the final waypoints in the vehicle's local navigation frame,
   followed by a fixed calibration translation.
"""

import logging
import math
from functools import lru_cache
from typing import List, Sequence, Tuple

import pyproj
from returns.maybe import Maybe
from shapely.geometry import Point
from shapely.ops import transform

from dronemission.covergen import constants
from dronemission.covergen.models import (
    AbsoluteWaypoint,
    CartesianWaypoint,
    GeoPoint,
    UtmZone,
)
from dronemission.covergen.spatial.geometry import ensure_finite

logger = logging.getLogger(__name__)


def utm_zone(longitude: float) -> int:
    """
    Returns the 6-degree UTM zone number for a longitude.

    Longitude 180 would give zone 61, which does not exist; it is folded
    into zone 60.
    """
    zone = math.floor((longitude + 180) / 6) + 1
    return max(1, min(60, zone))


def zone_for(point: GeoPoint) -> UtmZone:
    """Zone from the point's longitude, hemisphere from its latitude sign."""
    return UtmZone(utm_zone(point.lon), point.lat < 0)


@lru_cache(maxsize=128)
def get_utm_transformers(zone: UtmZone):
    """
    Get cached UTM transformers for a given zone.

    Returns:
    --------
    tuple : (to_utm, to_wgs) transformer objects, both in (x, y) / (lon, lat)
            axis order
    """
    to_utm = pyproj.Transformer.from_crs("EPSG:4326", zone.epsg, always_xy=True)
    to_wgs = pyproj.Transformer.from_crs(zone.epsg, "EPSG:4326", always_xy=True)
    return to_utm, to_wgs


class PlanarFrame:
    """A polygon's metric working plane."""

    def __init__(self, zone: UtmZone):
        self.zone = zone
        self._to_utm, self._to_wgs = get_utm_transformers(zone)

    def to_planar(self, lon: float, lat: float) -> Tuple[float, float]:
        x, y = self._to_utm.transform(lon, lat)
        ensure_finite((x, y), f"Projection of ({lon}, {lat}) into {self.zone.epsg}")
        return x, y

    def to_geographic(self, x: float, y: float) -> Tuple[float, float]:
        lon, lat = self._to_wgs.transform(x, y)
        ensure_finite((lon, lat), f"Inverse projection of ({x}, {y}) from {self.zone.epsg}")
        return lon, lat

    def buffer(self, x: float, y: float, radius: float):
        """
        Buffer a planar point by a radius in meters.

        Returns the disc in geographic (lon, lat) coordinates.
        """
        quad_segs = constants.CIRCLE_SEGMENTS // 4
        disc = Point(x, y).buffer(radius, quad_segs=quad_segs)
        return transform(self._to_wgs.transform, disc)


def flat_earth_offset(point: GeoPoint, reference: GeoPoint) -> Tuple[float, float]:
    """
    East and north offsets, in meters, of a point from a reference point.

    Valid only over distances short enough for the earth to be treated as
    flat around the reference latitude.
    """
    d_lat = point.lat - reference.lat
    d_lon = point.lon - reference.lon
    x = d_lon * (math.pi / 180) * constants.EARTH_RADIUS * math.cos(reference.lat * math.pi / 180)
    y = d_lat * (math.pi / 180) * constants.EARTH_RADIUS
    return x, y


def to_cartesian(
    waypoints: Sequence[AbsoluteWaypoint],
    reference: Maybe[GeoPoint] = Maybe.empty,
    precision: int = constants.DEFAULT_CARTESIAN_PRECISION,
) -> List[CartesianWaypoint]:
    """
    Convert absolute waypoints to the flat-earth frame.

    The frame is anchored at `reference` when one is given, otherwise at the
    first waypoint. Offsets are rounded to `precision` decimals.
    """
    if not waypoints:
        return []

    origin = reference.value_or(GeoPoint(waypoints[0].lat, waypoints[0].lng))
    logger.debug(f"Converting {len(waypoints)} waypoints to cartesian around {origin}")

    cartesian = []
    for waypoint in waypoints:
        x, y = flat_earth_offset(GeoPoint(waypoint.lat, waypoint.lng), origin)
        z = waypoint.alt if waypoint.alt is not None else constants.DEFAULT_MISSING_ALTITUDE
        cartesian.append(
            CartesianWaypoint(waypoint.id, round(x, precision), round(y, precision), z)
        )
    return cartesian


def apply_translation(
    waypoints: Sequence[CartesianWaypoint],
    translation_x: float = constants.DEFAULT_TRANSLATION_X,
    translation_y: float = constants.DEFAULT_TRANSLATION_Y,
) -> List[CartesianWaypoint]:
    """Shift cartesian waypoints by the frame-origin calibration offset."""
    logger.debug(f"Applying translation: x={translation_x}m, y={translation_y}m")
    return [
        CartesianWaypoint(w.id, w.x + translation_x, w.y + translation_y, w.z)
        for w in waypoints
    ]
