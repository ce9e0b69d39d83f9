"""
Overlap magnitude and parcel conflict detection

Combines the geometric predicate with a text signal taken from the surveyor's
boundary descriptions. Two parcels conflict when their polygons overlap, when
each names the same deed on facing sides, or both.
"""

import re
from typing import List, Optional, Sequence
from loguru import logger
from shapely.geometry import Polygon as ShapelyPolygon

from ..config import get_config
from ..models import BoundarySet, OverlapVerdict, Parcel, ParcelOverlap, Polygon
from .containment import do_polygons_overlap, is_point_in_polygon
from .utils import filter_valid_points


# Side of parcel A paired with the facing side of parcel B
OPPOSITE_SIDES = (
    ("N", "S"),
    ("S", "N"),
    ("E", "W"),
    ("W", "E"),
)


def overlap_percentage(poly_a: Polygon, poly_b: Polygon) -> float:
    """
    Estimate mutual overlap in [0, 100] by vertex sampling

    pctA is the share of A's vertices inside B, pctB the share of B's vertices
    inside A; the result is their mean. This is a coarse estimate, not an area
    ratio: polygons with few vertices around the shared region can be under
    or over-reported. Returns 0.0 when the polygons do not overlap.
    """
    a = filter_valid_points(poly_a)
    b = filter_valid_points(poly_b)

    if not do_polygons_overlap(a, b):
        return 0.0

    pct_a = sum(1 for p in a if is_point_in_polygon(p, b)) / len(a)
    pct_b = sum(1 for p in b if is_point_in_polygon(p, a)) / len(b)

    return (pct_a + pct_b) / 2 * 100


def intersection_area_ratio(poly_a: Polygon, poly_b: Polygon) -> float:
    """
    Exact planar intersection area as a percentage of the smaller polygon

    Computed with shapely in degree space. Used to cross-check the vertex
    sampling estimate, not by the overlap verdict.
    """
    a = filter_valid_points(poly_a)
    b = filter_valid_points(poly_b)
    if len(a) < 3 or len(b) < 3:
        return 0.0

    shape_a = ShapelyPolygon([(p.longitude, p.latitude) for p in a])
    shape_b = ShapelyPolygon([(p.longitude, p.latitude) for p in b])
    if not shape_a.is_valid:
        shape_a = shape_a.buffer(0)
    if not shape_b.is_valid:
        shape_b = shape_b.buffer(0)

    smaller = min(shape_a.area, shape_b.area)
    if smaller <= 0:
        return 0.0

    return min(100.0, shape_a.intersection(shape_b).area / smaller * 100)


def is_deed_reference(text: Optional[str]) -> bool:
    """True when a boundary description looks like a deed number, e.g. "D001" """
    if not text:
        return False
    pattern = get_config().boundary.deed_reference_pattern
    return re.fullmatch(pattern, text.strip()) is not None


def _normalize_reference(text: str) -> str:
    return text.strip().casefold()


def do_boundaries_overlap(
    sides_a: Optional[BoundarySet],
    sides_b: Optional[BoundarySet]
) -> bool:
    """
    Check whether two parcels name the same deed on facing sides

    A.North is compared with B.South, A.East with B.West and so on. Only
    deed-number shaped references count; landmark text like "Main Road" is
    shared by many parcels and says nothing about overlap.
    """
    if sides_a is None or sides_b is None:
        return False

    for side_a, side_b in OPPOSITE_SIDES:
        ref_a = sides_a.get(side_a)
        ref_b = sides_b.get(side_b)
        if not (is_deed_reference(ref_a) and is_deed_reference(ref_b)):
            continue
        if _normalize_reference(ref_a) == _normalize_reference(ref_b):
            logger.debug(f"Boundary reference match: {side_a}={ref_a!r} / {side_b}={ref_b!r}")
            return True

    return False


def compare_parcels(
    poly_a: Polygon,
    poly_b: Polygon,
    sides_a: Optional[BoundarySet] = None,
    sides_b: Optional[BoundarySet] = None
) -> Optional[OverlapVerdict]:
    """Combine geometric and boundary-text checks into one verdict, None if clear"""
    polygon_hit = do_polygons_overlap(poly_a, poly_b)
    boundary_hit = do_boundaries_overlap(sides_a, sides_b)

    if polygon_hit and boundary_hit:
        return OverlapVerdict(overlap_type="both", overlap_percentage=overlap_percentage(poly_a, poly_b))
    if polygon_hit:
        return OverlapVerdict(overlap_type="polygon", overlap_percentage=overlap_percentage(poly_a, poly_b))
    if boundary_hit:
        return OverlapVerdict(overlap_type="boundary")
    return None


class OverlapDetector:
    """
    Detect conflicting parcels

    Usage:
        detector = OverlapDetector()
        conflicts = detector.detect(parcels)
    """

    def detect(self, parcels: Sequence[Parcel]) -> List[ParcelOverlap]:
        """Compare every unordered pair of parcels once"""
        results = []

        for i in range(len(parcels)):
            for j in range(i + 1, len(parcels)):
                overlap = self._compare(parcels[i], parcels[j])
                if overlap:
                    results.append(overlap)

        if results:
            logger.warning(f"Detected {len(results)} overlapping parcel pair(s) among {len(parcels)} parcels")
        else:
            logger.info(f"No overlaps among {len(parcels)} parcels")

        return results

    def check(self, candidate: Parcel, existing: Sequence[Parcel]) -> List[ParcelOverlap]:
        """Compare a new parcel against each registered parcel"""
        results = []

        for other in existing:
            if other.parcel_id == candidate.parcel_id:
                continue
            overlap = self._compare(candidate, other)
            if overlap:
                results.append(overlap)

        logger.info(f"Parcel {candidate.parcel_id}: {len(results)} conflict(s) with {len(existing)} existing parcels")
        return results

    def _compare(self, parcel_a: Parcel, parcel_b: Parcel) -> Optional[ParcelOverlap]:
        verdict = compare_parcels(
            parcel_a.coordinates,
            parcel_b.coordinates,
            parcel_a.sides,
            parcel_b.sides
        )
        if verdict is None:
            return None

        logger.debug(
            f"{parcel_a.parcel_id} vs {parcel_b.parcel_id}: {verdict.overlap_type}"
            + (f" ({verdict.overlap_percentage:.1f}%)" if verdict.overlap_percentage is not None else "")
        )
        return ParcelOverlap(parcel_a=parcel_a.parcel_id, parcel_b=parcel_b.parcel_id, verdict=verdict)
