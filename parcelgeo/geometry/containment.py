"""
Point-in-polygon and polygon overlap predicates

All tests run in (longitude, latitude) degree space. No projection is needed:
containment and crossing are invariant under the flat-earth scaling.
"""

from typing import Tuple
from loguru import logger

from ..models import GeoPoint, Polygon
from .utils import filter_valid_points, bounding_box


def is_point_in_polygon(point: GeoPoint, polygon: Polygon) -> bool:
    """
    Even-odd ray casting test

    Points lying exactly on an edge may go either way. Invalid vertices are
    dropped first; an invalid query point is never inside.
    """
    if not point.is_valid:
        return False

    polygon = filter_valid_points(polygon)
    n = len(polygon)
    if n < 3:
        return False

    x, y = point.longitude, point.latitude
    inside = False

    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].longitude, polygon[i].latitude
        xj, yj = polygon[j].longitude, polygon[j].latitude

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i

    return inside


def _orientation(a: Tuple[float, float], b: Tuple[float, float], c: Tuple[float, float]) -> float:
    """Cross product of (b - a) x (c - a): > 0 left turn, < 0 right turn, 0 collinear"""
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def segments_intersect(p1: GeoPoint, p2: GeoPoint, q1: GeoPoint, q2: GeoPoint) -> bool:
    """
    Proper intersection of segments p1-p2 and q1-q2

    Each segment's endpoints must lie strictly on opposite sides of the other
    segment's line. Collinear overlap and touching endpoints are not counted.
    """
    a = (p1.longitude, p1.latitude)
    b = (p2.longitude, p2.latitude)
    c = (q1.longitude, q1.latitude)
    d = (q2.longitude, q2.latitude)

    d1 = _orientation(c, d, a)
    d2 = _orientation(c, d, b)
    d3 = _orientation(a, b, c)
    d4 = _orientation(a, b, d)

    return ((d1 > 0 and d2 < 0) or (d1 < 0 and d2 > 0)) and \
           ((d3 > 0 and d4 < 0) or (d3 < 0 and d4 > 0))


def _any_vertex_inside(points: Polygon, polygon: Polygon) -> bool:
    return any(is_point_in_polygon(p, polygon) for p in points)


def _any_edges_cross(poly_a: Polygon, poly_b: Polygon) -> bool:
    n, m = len(poly_a), len(poly_b)
    for i in range(n):
        a1, a2 = poly_a[i], poly_a[(i + 1) % n]
        for j in range(m):
            if segments_intersect(a1, a2, poly_b[j], poly_b[(j + 1) % m]):
                return True
    return False


def do_polygons_overlap(poly_a: Polygon, poly_b: Polygon) -> bool:
    """
    Check whether two parcel polygons overlap

    Steps:
    1. Drop invalid coordinates; fewer than 3 points on either side -> False
    2. Reject when bounding boxes are disjoint
    3. Any vertex of one polygon inside the other -> True
    4. Any pair of edges properly crossing -> True

    Two polygons that coincide exactly along their edges without any vertex
    containment are not detected.
    """
    a = filter_valid_points(poly_a)
    b = filter_valid_points(poly_b)
    if len(a) < 3 or len(b) < 3:
        return False

    if not bounding_box(a).intersects(bounding_box(b)):
        return False

    if _any_vertex_inside(a, b) or _any_vertex_inside(b, a):
        return True

    if _any_edges_cross(a, b):
        logger.debug("Polygons overlap by edge crossing only")
        return True

    return False
