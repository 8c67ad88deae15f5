"""Spatial resolution: point-in-polygon lookup across all configured layers.

For each layer, the first feature (in stored order) whose polygon covers the
point determines the district. Containment is boundary-inclusive, so a point
on an edge shared by two features resolves to whichever was stored first.
"""

import re
from collections.abc import Mapping
from typing import Any

from civic_atlas.lib.districts.layers import BoundaryLayer
from civic_atlas.lib.jurisdiction import DistrictLayerConfig, number_property_candidates

ResolvedDistricts = dict[str, int | None]

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_district_number(value: Any) -> int | None:
    """Parse the leading base-10 integer of an attribute value.

    ``"07"`` → 7, ``7.0`` → 7, ``"12A"`` → 12. Booleans, None, and values
    without a leading integer return None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def district_number_from_properties(properties: Mapping[str, Any], layer: DistrictLayerConfig) -> int | None:
    """Extract the district number from a feature's attributes.

    Candidate attribute names are tried in priority order; a present key
    whose value does not parse is skipped as if absent.

    Args:
        properties: Feature attribute bag.
        layer: Layer configuration naming the number property and aliases.

    Returns:
        The district number, or None if no candidate attribute parses.
    """
    for column in number_property_candidates(layer):
        if column not in properties:
            continue
        number = parse_district_number(properties[column])
        if number is not None:
            return number
    return None


def resolve_layer(lat: float, lng: float, layer: BoundaryLayer) -> int | None:
    """Resolve a point against a single layer."""
    for feature in layer.features:
        if not feature.covers(lng, lat):
            continue
        # First containing feature decides the layer, even if its number is unreadable.
        return district_number_from_properties(feature.properties, layer.config)
    return None


def resolve_districts(lat: float, lng: float, layers: Mapping[str, BoundaryLayer]) -> ResolvedDistricts:
    """Find the containing district in every configured layer.

    Args:
        lat: WGS84 latitude.
        lng: WGS84 longitude.
        layers: Mapping of layer id to loaded layer. Every key appears in
            the result.

    Returns:
        Dict mapping each layer id to its district number, or None when the
        point is not inside any feature of that layer.
    """
    return {layer_id: resolve_layer(lat, lng, layer) for layer_id, layer in layers.items()}
