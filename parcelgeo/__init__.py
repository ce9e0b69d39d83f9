"""
Parcel geometry engine

Overlap detection, area and side labeling for registered land parcels
"""

from .models import (
    GeoPoint, BoundarySet, OverlapVerdict, SideLabel,
    Parcel, ParcelOverlap, ParcelMeasurement,
    as_point, as_polygon,
)
from .config import get_config, validate_config, EngineConfig

__all__ = [
    "GeoPoint",
    "BoundarySet",
    "OverlapVerdict",
    "SideLabel",
    "Parcel",
    "ParcelOverlap",
    "ParcelMeasurement",
    "as_point",
    "as_polygon",
    "get_config",
    "validate_config",
    "EngineConfig",
]
