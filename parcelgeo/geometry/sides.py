"""
Boundary side assignment and edge bearings

Side assignment uses the extremum-midpoint rule: the North side of a parcel is
the edge whose midpoint lies furthest north, and likewise for the other three
sides. This holds up better on irregular quadrilaterals than bucketing edges by
bearing, which can give two "North" edges and no "East" edge.

Bearing classification answers a different question (which way does this edge
run) and is kept separately.
"""

import math
from typing import Dict, List, Optional
from loguru import logger

from ..config import get_config
from ..models import (
    BoundarySet, GeoPoint, Polygon, SideLabel,
    CARDINAL_DIRECTIONS,
)
from .utils import edge_midpoint, filter_valid_points, offset_point


# Label order used by the map popups
LABEL_ORDER = ("N", "E", "S", "W")

# Sign of (dx, dy) offsets in meters for the label polygon's far corners:
# (start corner, end corner)
OFFSET_SIGNS = {
    "N": ((-1, 1), (1, 1)),
    "S": ((1, -1), (-1, -1)),
    "E": ((1, 1), (1, -1)),
    "W": ((-1, -1), (-1, 1)),
}


def get_bearing(start: GeoPoint, end: GeoPoint) -> float:
    """
    Initial great-circle bearing from start to end

    Degrees in (-180, 180], 0 = North, positive clockwise.
    """
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    d_lng = math.radians(end.longitude - start.longitude)

    y = math.sin(d_lng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lng)

    bearing = math.degrees(math.atan2(y, x))
    # atan2(-0.0, x < 0) gives -180
    return 180.0 if bearing == -180.0 else bearing


def classify_edge_bearing(start: GeoPoint, end: GeoPoint) -> str:
    """Compass direction an edge runs in: N, S, E or W"""
    boundary = get_config().boundary
    bearing = get_bearing(start, end)
    abs_bearing = abs(bearing)

    if abs_bearing < boundary.bearing_north_threshold_deg:
        return "N"
    if abs_bearing > boundary.bearing_south_threshold_deg:
        return "S"
    return "E" if bearing > 0 else "W"


def classify_edges(polygon: Polygon) -> List[str]:
    """Bearing direction of every edge i -> i+1, empty for fewer than 4 points"""
    polygon = filter_valid_points(polygon)
    n = len(polygon)
    if n < 4:
        return []
    return [classify_edge_bearing(polygon[i], polygon[(i + 1) % n]) for i in range(n)]


def _side_score(midpoint: GeoPoint, direction: str) -> float:
    if direction == "N":
        return midpoint.latitude
    if direction == "S":
        return -midpoint.latitude
    if direction == "E":
        return midpoint.longitude
    return -midpoint.longitude


def find_side_edge_index(polygon: Polygon, direction: str) -> Optional[int]:
    """
    Index of the edge that best represents a side of the polygon

    Edge i joins vertex i and vertex (i + 1) % n of the polygon with invalid
    points removed. Ties keep the first edge. Returns None for fewer than 4
    valid points.

    Raises:
        ValueError: if direction is not one of N, S, E, W
    """
    if direction not in CARDINAL_DIRECTIONS:
        raise ValueError(f"Unknown cardinal direction: {direction!r}")

    polygon = filter_valid_points(polygon)
    n = len(polygon)
    if n < 4:
        return None

    best_index = 0
    best_score = -math.inf

    for i in range(n):
        midpoint = edge_midpoint(polygon[i], polygon[(i + 1) % n])
        score = _side_score(midpoint, direction)
        if score > best_score:
            best_score = score
            best_index = i

    return best_index


def _side_label(polygon: Polygon, direction: str, text: Optional[str] = None) -> Optional[SideLabel]:
    index = find_side_edge_index(polygon, direction)
    if index is None:
        return None

    start = polygon[index]
    end = polygon[(index + 1) % len(polygon)]
    return SideLabel(
        direction=direction,
        edge_index=index,
        start=start,
        end=end,
        midpoint=edge_midpoint(start, end),
        text=text,
    )


def assign_sides(polygon: Polygon) -> Dict[str, SideLabel]:
    """Representative edge for each of N, S, E, W; empty for fewer than 4 points"""
    polygon = filter_valid_points(polygon)
    if len(polygon) < 4:
        logger.debug(f"Side assignment needs at least 4 points, got {len(polygon)}")
        return {}

    return {d: _side_label(polygon, d) for d in CARDINAL_DIRECTIONS}


def label_boundaries(polygon: Polygon, sides: BoundarySet) -> List[SideLabel]:
    """Attach each non-empty boundary description to its side's edge"""
    polygon = filter_valid_points(polygon)
    if len(polygon) < 4:
        return []

    labels = []
    for direction in LABEL_ORDER:
        text = sides.get(direction)
        if not text:
            continue
        labels.append(_side_label(polygon, direction, text))

    return labels


def create_offset_boundary_shape(
    start: GeoPoint,
    end: GeoPoint,
    direction: str,
    offset_fraction: Optional[float] = None
) -> List[GeoPoint]:
    """
    Quadrilateral pushed out from an edge, used to place a side label

    The offset is offset_fraction times the edge length (meters), applied to
    each far corner with the fixed per-side signs in OFFSET_SIGNS. Returns
    [start, end, end', start'], or an empty list for a zero-length edge, an invalid
    endpoint or an unknown direction.
    """
    signs = OFFSET_SIGNS.get(direction)
    if signs is None or not (start.is_valid and end.is_valid):
        return []

    if offset_fraction is None:
        offset_fraction = get_config().boundary.label_offset_fraction

    dx = end.longitude - start.longitude
    dy = end.latitude - start.latitude
    length = math.sqrt(dx * dx + dy * dy) * get_config().geo.meters_per_degree
    if not length > 0:
        return []

    offset = length * offset_fraction
    (sx1, sy1), (sx2, sy2) = signs

    p1 = offset_point(start, sx1 * offset, sy1 * offset)
    p2 = offset_point(end, sx2 * offset, sy2 * offset)

    return [start, end, p2, p1]
