"""
Data models for the covergen package.

This module contains the value types that flow through the coverage
pipeline, from the validated polygon ring to the final waypoint lists,
along with the errors the core surfaces to its callers.
"""

import dataclasses
from typing import List, Optional


class CoverageError(Exception):
    """Base class for errors raised while computing coverage."""

    pass


class InvalidPolygon(CoverageError):
    """Raised when a ring fails structural or numeric validation."""

    pass


class InvalidGeometry(CoverageError):
    """Raised when a bounding box, centroid or projection is not finite."""

    pass


@dataclasses.dataclass(frozen=True)
class GeoPoint:
    """A WGS84 position in degrees."""

    lat: float
    lon: float


@dataclasses.dataclass(frozen=True)
class AbsoluteWaypoint:
    id: int
    lat: float
    lng: float
    alt: float


@dataclasses.dataclass(frozen=True)
class CartesianWaypoint:
    id: int
    x: float
    y: float
    z: float


@dataclasses.dataclass
class CoverageResult:
    """
    Output of a coverage computation.

    `cartesian` is empty unless it was requested. `truncated` reports that
    the candidate cap stopped lattice generation early, and `fallback` that
    the polygon's own vertices were used because no lattice point survived.
    """

    absolute: List[AbsoluteWaypoint] = dataclasses.field(default_factory=list)
    cartesian: List[CartesianWaypoint] = dataclasses.field(default_factory=list)
    truncated: bool = False
    fallback: bool = False


@dataclasses.dataclass(frozen=True)
class PointVerdict:
    """
    Outcome of filtering one lattice candidate.

    A rejected verdict carries the reason, which is either an insufficient
    overlap ratio or the text of a failed intersection.
    """

    accepted: bool
    ratio: Optional[float] = None
    reason: Optional[str] = None

    @classmethod
    def accept(cls, ratio: Optional[float] = None) -> "PointVerdict":
        return cls(True, ratio=ratio)

    @classmethod
    def reject(cls, reason: str, ratio: Optional[float] = None) -> "PointVerdict":
        return cls(False, ratio=ratio, reason=reason)


@dataclasses.dataclass(frozen=True)
class UtmZone:
    number: int
    south: bool

    @property
    def epsg(self) -> str:
        prefix = 327 if self.south else 326
        return f"EPSG:{prefix}{self.number:02d}"


@dataclasses.dataclass
class LatticeResult:
    # Accepted points, one list per non-empty row, in generation order
    rows: List[List[GeoPoint]]
    removed: List[GeoPoint]
    candidates: int
    truncated: bool
    zone: UtmZone
