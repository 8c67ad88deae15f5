"""Districts library: in-memory boundary layers and point-in-polygon resolution.

Public API:
    - BoundaryLayer / DistrictFeature: Loaded layer data
    - load_layers: Load every configured layer (missing files become empty layers)
    - read_layer_geojson: Direct GeoJSON layer reader
    - load_jurisdiction_boundary: Jurisdiction outline loader
    - resolve_districts: Point → district number per layer
    - district_number_from_properties: Attribute → district number
    - get_district_shapes: Simplified display geometry for resolved districts
    - shapes_bbox: Map-fitting bounds for the returned shapes
"""

from civic_atlas.lib.districts.layers import (
    BoundaryLayer,
    DistrictFeature,
    features_from_geojson,
    load_jurisdiction_boundary,
    load_layers,
    read_layer_geojson,
)
from civic_atlas.lib.districts.resolver import (
    ResolvedDistricts,
    district_number_from_properties,
    parse_district_number,
    resolve_districts,
)
from civic_atlas.lib.districts.shapes import STATEWIDE_SHAPE_KEY, geometry_bbox, get_district_shapes, shapes_bbox

__all__ = [
    "STATEWIDE_SHAPE_KEY",
    "BoundaryLayer",
    "DistrictFeature",
    "ResolvedDistricts",
    "district_number_from_properties",
    "features_from_geojson",
    "geometry_bbox",
    "get_district_shapes",
    "load_jurisdiction_boundary",
    "load_layers",
    "parse_district_number",
    "read_layer_geojson",
    "resolve_districts",
    "shapes_bbox",
]
