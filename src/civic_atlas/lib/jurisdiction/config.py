"""Jurisdiction configuration: geography, district layers, and office slots."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from loguru import logger


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box in WGS84 degrees."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def __post_init__(self) -> None:
        if self.min_lat > self.max_lat or self.min_lng > self.max_lng:
            msg = f"Bounding box minimums must not exceed maximums: {self}"
            raise ValueError(msg)

    def contains(self, lat: float, lng: float) -> bool:
        """Return True when the point is inside the box (edges inclusive)."""
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


@dataclass(frozen=True)
class FocusPoint:
    """Point used to bias geocoder ranking toward the jurisdiction."""

    lat: float
    lng: float


@dataclass(frozen=True)
class DistrictLayerConfig:
    """One named category of district boundaries.

    ``number_property`` names the feature attribute holding the district
    number; ``number_property_aliases`` lists legacy or alternate names that
    are consulted after the primary name and its case variants.
    """

    layer_id: str
    label: str
    path: str
    number_property: str
    number_property_aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class OfficeSlot:
    """A configured office that every officials lookup reports on.

    A well-formed slot is either statewide or bound to exactly one layer.
    """

    office_id: str
    office_label: str
    statewide: bool = False
    layer: str | None = None

    @property
    def is_statewide(self) -> bool:
        return self.statewide and not self.layer

    @property
    def is_layer_bound(self) -> bool:
        return not self.statewide and bool(self.layer)


@dataclass(frozen=True)
class JurisdictionConfig:
    """Static description of the jurisdiction served by this deployment."""

    name: str
    country_code: str
    state_code: str
    state_name: str
    state_slug: str
    bounds: BoundingBox
    focus_point: FocusPoint
    map_root: str
    boundary_path: str
    layers: tuple[DistrictLayerConfig, ...] = ()
    office_slots: tuple[OfficeSlot, ...] = field(default_factory=tuple)

    @property
    def layer_ids(self) -> list[str]:
        return [layer.layer_id for layer in self.layers]

    def get_layer(self, layer_id: str) -> DistrictLayerConfig | None:
        for layer in self.layers:
            if layer.layer_id == layer_id:
                return layer
        return None


def number_property_candidates(layer: DistrictLayerConfig) -> list[str]:
    """Attribute names to try, in priority order, when reading a district number.

    Args:
        layer: Layer configuration.

    Returns:
        The number property, its lower- and upper-case variants, then the
        aliases, with duplicates removed.
    """
    base = [
        layer.number_property,
        layer.number_property.lower(),
        layer.number_property.upper(),
        *layer.number_property_aliases,
    ]
    return list(dict.fromkeys(base))


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    if key not in data or data[key] in (None, ""):
        msg = f"Jurisdiction config {context} is missing required key {key!r}"
        raise ValueError(msg)
    return data[key]


def _parse_layers(raw: Any) -> tuple[DistrictLayerConfig, ...]:
    if not isinstance(raw, dict):
        msg = "Jurisdiction config 'layers' must be a mapping of layer id to layer settings"
        raise ValueError(msg)

    layers: list[DistrictLayerConfig] = []
    for layer_id, settings in raw.items():
        if not isinstance(settings, dict):
            msg = f"Layer {layer_id!r} settings must be a mapping"
            raise ValueError(msg)
        aliases = settings.get("number_property_aliases") or []
        layers.append(
            DistrictLayerConfig(
                layer_id=str(layer_id),
                label=str(settings.get("label", layer_id)),
                path=str(_require(settings, "path", f"layer {layer_id!r}")),
                number_property=str(_require(settings, "number_property", f"layer {layer_id!r}")),
                number_property_aliases=tuple(str(a) for a in aliases),
            )
        )
    return tuple(layers)


def _parse_slots(raw: Any) -> tuple[OfficeSlot, ...]:
    if not isinstance(raw, list):
        msg = "Jurisdiction config 'office_slots' must be a list"
        raise ValueError(msg)

    slots: list[OfficeSlot] = []
    for item in raw:
        if not isinstance(item, dict):
            msg = f"Office slot entries must be mappings, got {type(item).__name__}"
            raise ValueError(msg)
        office_id = str(_require(item, "office_id", "office slot"))
        slots.append(
            OfficeSlot(
                office_id=office_id,
                office_label=str(item.get("office_label", office_id)),
                statewide=bool(item.get("statewide", False)),
                layer=item.get("layer") or None,
            )
        )
    return tuple(slots)


def jurisdiction_from_mapping(data: dict[str, Any]) -> JurisdictionConfig:
    """Build a JurisdictionConfig from a parsed YAML/JSON mapping.

    Raises:
        ValueError: If required keys are missing or malformed.
    """
    bounds = _require(data, "bounds", "root")
    focus = data.get("focus_point")
    state = data.get("state") or {}
    slug = str(state.get("slug", "default"))
    map_root = str(data.get("map_root", f"district-maps/{slug}"))

    try:
        bbox = BoundingBox(
            min_lat=float(bounds["min_lat"]),
            max_lat=float(bounds["max_lat"]),
            min_lng=float(bounds["min_lng"]),
            max_lng=float(bounds["max_lng"]),
        )
        if focus:
            focus_point = FocusPoint(lat=float(focus["lat"]), lng=float(focus["lng"]))
        else:
            focus_point = FocusPoint(lat=(bbox.min_lat + bbox.max_lat) / 2, lng=(bbox.min_lng + bbox.max_lng) / 2)
    except (KeyError, TypeError) as e:
        msg = f"Jurisdiction config has malformed bounds or focus_point: {e}"
        raise ValueError(msg) from e

    return JurisdictionConfig(
        name=str(_require(data, "name", "root")),
        country_code=str(data.get("country_code", "US")),
        state_code=str(state.get("code", "")),
        state_name=str(state.get("name", "")),
        state_slug=slug,
        bounds=bbox,
        focus_point=focus_point,
        map_root=map_root,
        boundary_path=str(data.get("boundary_path", f"{map_root}/boundary/boundary.geojson")),
        layers=_parse_layers(data.get("layers", {})),
        office_slots=_parse_slots(data.get("office_slots", [])),
    )


def load_jurisdiction(path: Path) -> JurisdictionConfig:
    """Load a jurisdiction configuration from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed JurisdictionConfig.

    Raises:
        ValueError: If the file content is not a valid jurisdiction mapping.
    """
    logger.info(f"Reading jurisdiction config: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        msg = f"Jurisdiction config must be a mapping: {path}"
        raise ValueError(msg)

    return jurisdiction_from_mapping(data)
