"""Display geometry for resolved districts (simplified GeoJSON)."""

from collections.abc import Mapping
from typing import Any

from shapely.errors import ShapelyError
from shapely.geometry import mapping, shape
from shapely.geometry.base import BaseGeometry

from civic_atlas.lib.districts.layers import BoundaryLayer
from civic_atlas.lib.districts.resolver import ResolvedDistricts, district_number_from_properties

STATEWIDE_SHAPE_KEY = "statewide"
DEFAULT_TOLERANCE = 0.002

Bounds = tuple[float, float, float, float]


def simplify_geometry(geometry: BaseGeometry, tolerance: float = DEFAULT_TOLERANCE) -> dict[str, Any]:
    """Simplify a geometry for display and return it as a GeoJSON mapping."""
    return dict(mapping(geometry.simplify(tolerance, preserve_topology=False)))


def get_district_shapes(
    districts: ResolvedDistricts,
    layers: Mapping[str, BoundaryLayer],
    boundary: BaseGeometry | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> dict[str, dict[str, Any]]:
    """Collect simplified geometries for every resolved district.

    Args:
        districts: Resolved district numbers keyed by layer id.
        layers: Loaded boundary layers.
        boundary: Jurisdiction outline, added under ``"statewide"`` when given.
        tolerance: Simplification tolerance in degrees.

    Returns:
        Dict of shape key (layer id or ``"statewide"``) to GeoJSON geometry.
    """
    shapes: dict[str, dict[str, Any]] = {}

    for layer_id, layer in layers.items():
        number = districts.get(layer_id)
        if number is None:
            continue

        for feature in layer.features:
            if district_number_from_properties(feature.properties, layer.config) != number:
                continue
            shapes[layer_id] = simplify_geometry(feature.geometry, tolerance)
            break

    if boundary is not None:
        shapes[STATEWIDE_SHAPE_KEY] = simplify_geometry(boundary, tolerance)

    return shapes


def geometry_bbox(geometry: Mapping[str, Any] | None) -> Bounds | None:
    """Return ``(min_lng, min_lat, max_lng, max_lat)`` for a GeoJSON geometry mapping.

    Returns:
        The bounds, or None for a missing, empty, or unreadable geometry.
    """
    if not geometry:
        return None
    try:
        geom = shape(geometry)
    except (ShapelyError, ValueError, TypeError, AttributeError):
        return None
    if geom.is_empty:
        return None
    return geom.bounds


def shapes_bbox(shapes: Mapping[str, Mapping[str, Any]]) -> Bounds | None:
    """Bounds a map should fit to show the returned district shapes.

    Covers every district shape. The statewide outline is used only when no
    district shape is available.
    """
    district_keys = [key for key in shapes if key != STATEWIDE_SHAPE_KEY]
    keys = district_keys or [key for key in shapes if key == STATEWIDE_SHAPE_KEY]

    boxes = [box for box in (geometry_bbox(shapes[key]) for key in keys) if box is not None]
    if not boxes:
        return None
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )
