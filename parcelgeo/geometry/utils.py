"""
Geometry utility functions

Common coordinate helpers shared by the area, overlap and side modules
"""

import math
from dataclasses import dataclass
from typing import List, Optional
from loguru import logger

from ..config import get_config
from ..models import GeoPoint, Polygon


def is_valid_point(point: GeoPoint) -> bool:
    """Finite latitude in [-90, 90] and longitude in [-180, 180]"""
    return point.is_valid


def filter_valid_points(polygon: Polygon) -> List[GeoPoint]:
    """Return a new list holding only the usable points of a polygon"""
    valid = [p for p in polygon if p.is_valid]
    if len(valid) != len(polygon):
        logger.debug(f"Dropped {len(polygon) - len(valid)} invalid coordinate(s) from polygon")
    return valid


def great_circle_distance(start: GeoPoint, end: GeoPoint) -> float:
    """Great-circle distance between two points in meters"""
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)

    hav = (
        math.sin((lat2 - lat1) / 2) ** 2 +
        math.cos(lat1) * math.cos(lat2) * math.sin(math.radians(end.longitude - start.longitude) / 2) ** 2
    )
    # rounding can push hav just past 1 for antipodal points
    return 2 * get_config().geo.earth_radius_m * math.asin(math.sqrt(min(hav, 1.0)))


def polygon_centroid(polygon: Polygon) -> Optional[GeoPoint]:
    """Vertex average of a polygon, None when empty"""
    if not polygon:
        return None

    lat_sum = sum(p.latitude for p in polygon)
    lng_sum = sum(p.longitude for p in polygon)

    return GeoPoint(latitude=lat_sum / len(polygon), longitude=lng_sum / len(polygon))


def edge_midpoint(start: GeoPoint, end: GeoPoint) -> GeoPoint:
    return GeoPoint(
        latitude=(start.latitude + end.latitude) / 2,
        longitude=(start.longitude + end.longitude) / 2
    )


def offset_point(point: GeoPoint, dx: float, dy: float) -> GeoPoint:
    """
    Move a point by dx meters east and dy meters north

    Uses the flat-earth scale at the point's own latitude
    """
    m_per_deg = get_config().geo.meters_per_degree
    lat_offset = dy / m_per_deg
    lng_offset = dx / (m_per_deg * math.cos(math.radians(point.latitude)))
    return GeoPoint(latitude=point.latitude + lat_offset, longitude=point.longitude + lng_offset)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned extent in degrees"""
    min_lat: float
    min_lng: float
    max_lat: float
    max_lng: float

    def intersects(self, other: "BoundingBox") -> bool:
        """Closed-interval test, touching boxes intersect"""
        return not (
            self.max_lat < other.min_lat or
            other.max_lat < self.min_lat or
            self.max_lng < other.min_lng or
            other.max_lng < self.min_lng
        )


def bounding_box(polygon: Polygon) -> Optional[BoundingBox]:
    """Bounding box of a polygon, None when empty"""
    if not polygon:
        return None

    lats = [p.latitude for p in polygon]
    lngs = [p.longitude for p in polygon]
    return BoundingBox(min(lats), min(lngs), max(lats), max(lngs))
