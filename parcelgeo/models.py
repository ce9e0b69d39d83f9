"""
Pydantic models for parcel geometry

Coordinates follow the stored plan format: {latitude, longitude} in degrees
"""

import math
from typing import List, Optional, Dict, Any, Literal, Sequence, Union, Tuple
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, model_validator


Direction = Literal["N", "S", "E", "W"]

CARDINAL_DIRECTIONS: Tuple[str, ...] = ("N", "S", "E", "W")

SIDE_NAMES: Dict[str, str] = {
    "N": "North",
    "S": "South",
    "E": "East",
    "W": "West",
}


# ============================================================
# Coordinates
# ============================================================

class GeoPoint(BaseModel):
    """A WGS84-like point. Out-of-range values are kept and filtered later."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(validation_alias=AliasChoices("longitude", "lng", "lon"))

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        # (lat, lng) pairs
        if isinstance(data, (list, tuple)) and len(data) == 2:
            return {"latitude": data[0], "longitude": data[1]}
        return data

    @property
    def is_valid(self) -> bool:
        lat, lng = self.latitude, self.longitude
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0

    def as_tuple(self) -> Tuple[float, float]:
        """(lat, lng)"""
        return (self.latitude, self.longitude)


PointLike = Union[GeoPoint, Tuple[float, float], List[float], Dict[str, float]]

Polygon = Sequence[GeoPoint]


def as_point(value: PointLike) -> GeoPoint:
    if isinstance(value, GeoPoint):
        return value
    return GeoPoint.model_validate(value)


def as_polygon(points: Sequence[PointLike]) -> List[GeoPoint]:
    """Coerce GeoPoints, (lat, lng) pairs or mappings into a new list of GeoPoints"""
    return [as_point(p) for p in points]


class GeoJSONPolygon(BaseModel):
    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]]  # [[[lon, lat], ...]]

    @classmethod
    def from_points(cls, points: Polygon) -> "GeoJSONPolygon":
        ring = [[p.longitude, p.latitude] for p in points]
        if ring and ring[0] != ring[-1]:
            ring.append(ring[0])
        return cls(coordinates=[ring])


# ============================================================
# Boundaries
# ============================================================

class BoundarySet(BaseModel):
    """Free-text neighbour descriptions per side, as entered by the surveyor"""
    North: Optional[str] = None
    South: Optional[str] = None
    East: Optional[str] = None
    West: Optional[str] = None

    def get(self, direction: str) -> Optional[str]:
        """Look up a side by cardinal code (N/S/E/W)"""
        name = SIDE_NAMES.get(direction)
        if name is None:
            raise ValueError(f"Unknown cardinal direction: {direction!r}")
        return getattr(self, name)


class SideLabel(BaseModel):
    """Representative edge for one side of a parcel"""
    direction: Direction
    edge_index: int
    start: GeoPoint
    end: GeoPoint
    midpoint: GeoPoint
    text: Optional[str] = None


# ============================================================
# Overlap
# ============================================================

class OverlapVerdict(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    overlap_type: Literal["polygon", "boundary", "both"] = Field(alias="overlapType")
    overlap_percentage: Optional[float] = Field(default=None, alias="overlapPercentage")


class Parcel(BaseModel):
    """A registered or candidate parcel"""
    parcel_id: str
    coordinates: List[GeoPoint] = Field(default_factory=list)
    sides: Optional[BoundarySet] = None


class ParcelOverlap(BaseModel):
    parcel_a: str
    parcel_b: str
    verdict: OverlapVerdict


class ParcelMeasurement(BaseModel):
    area_sqm: float
    perches: float
    perimeter_m: float
    estimated_value: float
    centroid: Optional[GeoPoint] = None
