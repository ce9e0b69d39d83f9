"""
Parcel geometry routines

- area: Shoelace area in m², perches and other plan units
- containment: Point-in-polygon, segment crossing, polygon overlap
- overlap: Overlap magnitude, boundary-reference overlap, conflict detection
- sides: Edge bearings, N/S/E/W side assignment, label shapes
"""

from .area import (
    polygon_area_m2, area_to_perches, convert_area, estimate_value,
    polygon_perimeter_m, measure_parcel,
)
from .containment import is_point_in_polygon, segments_intersect, do_polygons_overlap
from .overlap import (
    overlap_percentage, intersection_area_ratio, is_deed_reference,
    do_boundaries_overlap, compare_parcels, OverlapDetector,
)
from .sides import (
    get_bearing, classify_edge_bearing, classify_edges,
    find_side_edge_index, assign_sides, label_boundaries,
    create_offset_boundary_shape,
)
from .utils import BoundingBox, bounding_box, filter_valid_points, great_circle_distance

__all__ = [
    "polygon_area_m2",
    "area_to_perches",
    "convert_area",
    "estimate_value",
    "polygon_perimeter_m",
    "measure_parcel",
    "is_point_in_polygon",
    "segments_intersect",
    "do_polygons_overlap",
    "overlap_percentage",
    "intersection_area_ratio",
    "is_deed_reference",
    "do_boundaries_overlap",
    "compare_parcels",
    "OverlapDetector",
    "get_bearing",
    "classify_edge_bearing",
    "classify_edges",
    "find_side_edge_index",
    "assign_sides",
    "label_boundaries",
    "create_offset_boundary_shape",
    "BoundingBox",
    "bounding_box",
    "filter_valid_points",
    "great_circle_distance",
]
