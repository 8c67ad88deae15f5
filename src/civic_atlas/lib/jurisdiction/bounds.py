"""Coordinate parsing and jurisdiction bounding-box validation."""

import math

from civic_atlas.lib.jurisdiction.config import BoundingBox, JurisdictionConfig


def parse_coordinates(lat: object, lng: object) -> tuple[float, float]:
    """Convert raw latitude/longitude input into finite WGS84 floats.

    Args:
        lat: Latitude as a number or numeric string.
        lng: Longitude as a number or numeric string.

    Returns:
        ``(lat, lng)`` tuple.

    Raises:
        ValueError: If either value is missing, non-numeric, non-finite,
            or outside the valid WGS84 range.
    """
    try:
        if isinstance(lat, bool) or isinstance(lng, bool):
            raise TypeError
        lat_f = float(lat)  # type: ignore[arg-type]
        lng_f = float(lng)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        msg = "Invalid latitude or longitude"
        raise ValueError(msg) from e

    if not (math.isfinite(lat_f) and math.isfinite(lng_f)):
        msg = "Invalid latitude or longitude"
        raise ValueError(msg)
    if not (-90 <= lat_f <= 90 and -180 <= lng_f <= 180):
        msg = "Invalid latitude or longitude"
        raise ValueError(msg)
    return lat_f, lng_f


def check_jurisdiction(lat: float, lng: float, bounds: BoundingBox) -> bool:
    """Return True when the point falls inside the jurisdiction bounding box."""
    return bounds.contains(lat, lng)


def validate_jurisdiction_coordinates(lat: float, lng: float, jurisdiction: JurisdictionConfig) -> None:
    """Validate that coordinates fall within the jurisdiction service area.

    Args:
        lat: WGS84 latitude.
        lng: WGS84 longitude.
        jurisdiction: Active jurisdiction configuration.

    Raises:
        ValueError: If coordinates are outside the jurisdiction bounding box.
    """
    if not check_jurisdiction(lat, lng, jurisdiction.bounds):
        msg = f"Address is outside {jurisdiction.name}."
        raise ValueError(msg)
