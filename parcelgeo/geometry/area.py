"""
Parcel area and unit conversions

Area is computed with the shoelace formula directly on (lat, lng) degrees and
scaled to square meters with a single flat-earth factor:

    111320² · cos(lat₀)

where lat₀ is the latitude of the first vertex. The factor is applied to the
whole polygon, not per edge, so the result is only accurate for parcels whose
latitude span is small. This is an accepted bound for land-parcel scale, not a
geodesic area.
"""

import math
from typing import Dict, Optional

from ..config import get_config
from ..models import Polygon, ParcelMeasurement
from .utils import filter_valid_points, great_circle_distance, polygon_centroid


# Square meters per unit, for the area units plans are recorded in
SQM_PER_UNIT: Dict[str, float] = {
    "Square Meter": 1.0,
    "Hectare": 10000.0,
    "Acre": 4046.8564224,
    "Square Kilometer": 1000000.0,
    "Square Mile": 2589988.110336,
    "Square Foot": 0.09290304,
    "Square Yard": 0.83612736,
}


def polygon_area_m2(polygon: Polygon) -> float:
    """Calculate polygon area in square meters, 0.0 for fewer than 3 valid points"""
    coords = filter_valid_points(polygon)
    if len(coords) < 3:
        return 0.0

    n = len(coords)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += coords[i].longitude * coords[j].latitude
        area -= coords[j].longitude * coords[i].latitude

    m_per_deg = get_config().geo.meters_per_degree
    scale = m_per_deg * m_per_deg * math.cos(math.radians(coords[0].latitude))

    return abs(area) / 2.0 * scale


def area_to_perches(area_sqm: float) -> float:
    return area_sqm / get_config().geo.sqm_per_perch


def convert_area(area_sqm: float, unit: str) -> float:
    """
    Convert square meters to a plan area unit

    Raises:
        ValueError: if the unit is not known
    """
    if unit == "Perches":
        return area_to_perches(area_sqm)

    factor = SQM_PER_UNIT.get(unit)
    if factor is None:
        known = ", ".join(list(SQM_PER_UNIT) + ["Perches"])
        raise ValueError(f"Unknown area unit {unit!r}, expected one of: {known}")

    return area_sqm / factor


def estimate_value(area_sqm: float, price_per_perch: Optional[float] = None) -> float:
    """Flat per-perch valuation"""
    if price_per_perch is None:
        price_per_perch = get_config().valuation.price_per_perch
    return area_to_perches(area_sqm) * price_per_perch


def polygon_perimeter_m(polygon: Polygon) -> float:
    """Perimeter of the closed ring in meters (great-circle length per edge)"""
    coords = filter_valid_points(polygon)
    if len(coords) < 2:
        return 0.0

    perimeter = 0.0
    n = len(coords)
    for i in range(n):
        j = (i + 1) % n
        perimeter += great_circle_distance(coords[i], coords[j])

    return perimeter


def measure_parcel(polygon: Polygon, price_per_perch: Optional[float] = None) -> ParcelMeasurement:
    """Area, perches, perimeter and valuation for one parcel"""
    area = polygon_area_m2(polygon)
    return ParcelMeasurement(
        area_sqm=area,
        perches=area_to_perches(area),
        perimeter_m=polygon_perimeter_m(polygon),
        estimated_value=estimate_value(area, price_per_perch),
        centroid=polygon_centroid(filter_valid_points(polygon)),
    )
