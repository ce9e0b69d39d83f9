"""
Configuration settings for the parcel geometry engine
"""

from dataclasses import dataclass, field
import re


@dataclass
class GeoConstants:
    """Planar approximation constants"""
    # Meters per degree of latitude (and of longitude at the equator)
    meters_per_degree: float = 111320.0

    # 1 perch = 25.2929 m²
    sqm_per_perch: float = 25.2929

    # Mean earth radius, used for great-circle perimeters only
    earth_radius_m: float = 6371000.0


@dataclass
class ValuationConfig:
    """Flat-rate parcel valuation"""
    price_per_perch: float = 500000.0


@dataclass
class BoundaryConfig:
    """Boundary reference matching and side labeling"""
    # Deed-number shaped references: "D001", "1234", "AB-12/3"
    # Landmark text ("Main Road", "Canal") never matches
    deed_reference_pattern: str = r"^[A-Za-z]{0,4}[-/]?\d+(?:[-/]\d+)*$"

    # Label polygon offset as a fraction of edge length
    label_offset_fraction: float = 0.3

    # |bearing| below north threshold = N, above south threshold = S
    bearing_north_threshold_deg: float = 45.0
    bearing_south_threshold_deg: float = 135.0


@dataclass
class EngineConfig:
    """Engine configuration"""
    geo: GeoConstants = field(default_factory=GeoConstants)

    valuation: ValuationConfig = field(default_factory=ValuationConfig)

    boundary: BoundaryConfig = field(default_factory=BoundaryConfig)


# Global config instance
config = EngineConfig()


def get_config() -> EngineConfig:
    """Get global configuration"""
    return config


def validate_config(config: EngineConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.geo is None:
        errors.append("geo constants are required but not set")
    else:
        if not config.geo.meters_per_degree or config.geo.meters_per_degree <= 0:
            errors.append(f"geo.meters_per_degree must be positive, got {config.geo.meters_per_degree}")
        if not config.geo.sqm_per_perch or config.geo.sqm_per_perch <= 0:
            errors.append(f"geo.sqm_per_perch must be positive, got {config.geo.sqm_per_perch}")
        if not config.geo.earth_radius_m or config.geo.earth_radius_m <= 0:
            errors.append(f"geo.earth_radius_m must be positive, got {config.geo.earth_radius_m}")

    if config.valuation is None:
        errors.append("valuation configuration is required but not set")
    elif config.valuation.price_per_perch is None or config.valuation.price_per_perch < 0:
        errors.append(f"valuation.price_per_perch must be non-negative, got {config.valuation.price_per_perch}")

    if config.boundary is None:
        errors.append("boundary configuration is required but not set")
    else:
        boundary = config.boundary
        if not boundary.deed_reference_pattern:
            errors.append("boundary.deed_reference_pattern is required but not set")
        else:
            try:
                re.compile(boundary.deed_reference_pattern)
            except re.error as e:
                errors.append(f"boundary.deed_reference_pattern is not a valid regex: {e}")

        if boundary.label_offset_fraction is None or boundary.label_offset_fraction <= 0:
            errors.append(f"boundary.label_offset_fraction must be positive, got {boundary.label_offset_fraction}")

        north = boundary.bearing_north_threshold_deg
        south = boundary.bearing_south_threshold_deg
        if not (0 < north < south < 180):
            errors.append(
                f"bearing thresholds must satisfy 0 < north < south < 180, got north={north}, south={south}"
            )

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
