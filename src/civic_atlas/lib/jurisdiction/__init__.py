"""Jurisdiction library: static geography, layer, and office-slot configuration.

Public API:
    - JurisdictionConfig: Full jurisdiction description
    - BoundingBox / FocusPoint: Geographic scope helpers
    - DistrictLayerConfig: One district boundary layer
    - OfficeSlot: One configured office row for officials lookups
    - DEFAULT_JURISDICTION: Built-in Illinois sample pack
    - load_jurisdiction: YAML override loader
    - number_property_candidates: District-number attribute lookup order
    - parse_coordinates / check_jurisdiction / validate_jurisdiction_coordinates
"""

from civic_atlas.lib.jurisdiction.bounds import (
    check_jurisdiction,
    parse_coordinates,
    validate_jurisdiction_coordinates,
)
from civic_atlas.lib.jurisdiction.config import (
    BoundingBox,
    DistrictLayerConfig,
    FocusPoint,
    JurisdictionConfig,
    OfficeSlot,
    jurisdiction_from_mapping,
    load_jurisdiction,
    number_property_candidates,
)
from civic_atlas.lib.jurisdiction.manifest import DEFAULT_JURISDICTION

__all__ = [
    "DEFAULT_JURISDICTION",
    "BoundingBox",
    "DistrictLayerConfig",
    "FocusPoint",
    "JurisdictionConfig",
    "OfficeSlot",
    "check_jurisdiction",
    "jurisdiction_from_mapping",
    "load_jurisdiction",
    "number_property_candidates",
    "parse_coordinates",
    "validate_jurisdiction_coordinates",
]
