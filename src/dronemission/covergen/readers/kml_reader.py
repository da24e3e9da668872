"""
Reads the survey polygon from a KML document.

Only documents describing exactly one Polygon are accepted; points, lines
and additional polygons are not disambiguated here.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List

from dronemission.covergen.models import GeoPoint

logger = logging.getLogger(__name__)

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"


class KmlError(Exception):
    """Raised when a KML document does not describe a single polygon."""

    pass


def read_polygon(kml_path) -> List[GeoPoint]:
    """
    Return the outer ring of the document's only polygon.

    Coordinates are read as KML 'lon,lat[,alt]' tuples; altitudes are
    dropped.
    """
    try:
        tree = ET.parse(kml_path)
    except ET.ParseError as e:
        raise KmlError(f"Invalid KML file: XML format error ({e})")
    except OSError as e:
        raise KmlError(f"Unable to read KML file {kml_path}: {e}")

    return polygon_from_element(tree.getroot())


def parse_polygon(kml_text: str) -> List[GeoPoint]:
    try:
        root = ET.fromstring(kml_text)
    except ET.ParseError as e:
        raise KmlError(f"Invalid KML file: XML format error ({e})")

    return polygon_from_element(root)


def polygon_from_element(root) -> List[GeoPoint]:
    polygons = _find_all(root, "Polygon")

    if not polygons:
        raise KmlError(
            "The KML file must contain a polygon; only other elements (points, lines, etc.) were found"
        )
    if len(polygons) > 1:
        raise KmlError(
            f"The KML file must contain a single polygon; {len(polygons)} were found"
        )

    outer = _find_all(polygons[0], "outerBoundaryIs") or [polygons[0]]
    coordinates = _find_all(outer[0], "coordinates")
    if not coordinates or not (coordinates[0].text or "").strip():
        raise KmlError("Invalid polygon: no coordinates found")

    tuples = [t for t in coordinates[0].text.split() if "," in t]
    if len(tuples) < 3:
        raise KmlError(
            f"Invalid polygon: at least 3 coordinates are required, found only {len(tuples)}"
        )

    points = [_geo_point(t) for t in tuples]
    logger.debug(f"KML parsed, found {len(points)} polygon coordinates")
    return points


def _geo_point(coordinate: str) -> GeoPoint:
    parts = coordinate.split(",")
    try:
        lon = float(parts[0])
        lat = float(parts[1])
    except ValueError:
        raise KmlError(f"Non-numeric coordinates: {coordinate}")
    return GeoPoint(lat, lon)


def _find_all(element, tag):
    """Descendants named `tag`, with or without the KML namespace."""
    found = element.findall(f".//{{{KML_NAMESPACE}}}{tag}")
    return found or element.findall(f".//{tag}")
