"""Boundary layers: GeoJSON district features held in memory for point lookups."""

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger
from shapely.geometry import MultiPolygon, Point, Polygon, shape
from shapely.geometry.base import BaseGeometry
from shapely.prepared import PreparedGeometry, prep

from civic_atlas.lib.jurisdiction import DistrictLayerConfig, JurisdictionConfig


@dataclass
class DistrictFeature:
    """A single district polygon with its attribute bag.

    Geometry is in longitude/latitude order. The prepared geometry and
    bounds are computed once so repeated containment tests stay cheap.
    """

    properties: dict[str, Any]
    geometry: BaseGeometry
    _prepared: PreparedGeometry = field(init=False, repr=False)
    _bounds: tuple[float, float, float, float] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._prepared = prep(self.geometry)
        self._bounds = self.geometry.bounds

    def covers(self, lng: float, lat: float) -> bool:
        """Return True when the point lies inside or on the boundary of the feature."""
        minx, miny, maxx, maxy = self._bounds
        if lng < minx or lng > maxx or lat < miny or lat > maxy:
            return False
        return self._prepared.covers(Point(lng, lat))


@dataclass
class BoundaryLayer:
    """A configured layer and its features in stored order."""

    config: DistrictLayerConfig
    features: list[DistrictFeature] = field(default_factory=list)

    @property
    def layer_id(self) -> str:
        return self.config.layer_id

    def __len__(self) -> int:
        return len(self.features)


def features_from_geojson(data: dict[str, Any], source: str = "<memory>") -> list[DistrictFeature]:
    """Convert a GeoJSON FeatureCollection mapping into district features.

    Only Polygon and MultiPolygon features are kept; geometry is used as-is
    with no validation or repair.

    Args:
        data: Parsed GeoJSON mapping.
        source: Label used in log messages.

    Returns:
        District features in the collection's stored order.

    Raises:
        ValueError: If the mapping is not a FeatureCollection.
    """
    if data.get("type") != "FeatureCollection":
        msg = f"Expected FeatureCollection, got {data.get('type')}"
        raise ValueError(msg)

    features: list[DistrictFeature] = []
    for i, feature in enumerate(data.get("features") or []):
        geom_data = feature.get("geometry")
        if not geom_data:
            continue

        geom = shape(geom_data)
        if not isinstance(geom, Polygon | MultiPolygon):
            logger.warning(f"{source}: skipping feature {i} with unsupported geometry type {geom.geom_type}")
            continue

        features.append(DistrictFeature(properties=dict(feature.get("properties") or {}), geometry=geom))

    return features


def read_layer_geojson(file_path: Path, config: DistrictLayerConfig) -> BoundaryLayer:
    """Read a GeoJSON file into a BoundaryLayer.

    Args:
        file_path: Path to .geojson or .json file.
        config: Layer configuration the file belongs to.

    Returns:
        The populated BoundaryLayer.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a GeoJSON FeatureCollection.
    """
    logger.debug(f"Reading layer {config.layer_id!r} from {file_path}")

    with file_path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    return BoundaryLayer(config=config, features=features_from_geojson(data, source=str(file_path)))


def load_layers(data_dir: Path, layers: Iterable[DistrictLayerConfig]) -> dict[str, BoundaryLayer]:
    """Load every configured layer from a data directory.

    Every configured layer id is present in the result. A layer whose file
    is missing or unreadable is logged and kept as an empty layer, so it
    resolves to "not found" for every point.

    Args:
        data_dir: Root data directory; layer paths are relative to it.
        layers: Layer configurations in configured order.

    Returns:
        Mapping of layer id to BoundaryLayer.
    """
    loaded: dict[str, BoundaryLayer] = {}
    for config in layers:
        file_path = data_dir / config.path
        try:
            layer = read_layer_geojson(file_path, config)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load layer {config.layer_id!r} from {file_path}: {e}")
            layer = BoundaryLayer(config=config)
        else:
            logger.info(f"Loaded {config.layer_id}: {len(layer)} districts")
        loaded[config.layer_id] = layer
    return loaded


def load_jurisdiction_boundary(data_dir: Path, jurisdiction: JurisdictionConfig) -> BaseGeometry | None:
    """Load the jurisdiction outline (first feature of the boundary file).

    Returns:
        The outline geometry, or None when the file is missing or empty.
    """
    file_path = data_dir / jurisdiction.boundary_path
    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        features = features_from_geojson(data, source=str(file_path))
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load jurisdiction boundary from {file_path}: {e}")
        return None

    if not features:
        logger.warning(f"Jurisdiction boundary file has no polygon features: {file_path}")
        return None
    return features[0].geometry
