"""Shared test fixtures: square district polygons, layers, rosters, and settings."""

import json
from pathlib import Path
from typing import Any

import pytest

from civic_atlas.core.config import Settings
from civic_atlas.lib.districts import BoundaryLayer, features_from_geojson
from civic_atlas.lib.jurisdiction import DEFAULT_JURISDICTION, DistrictLayerConfig

# A point in downtown Chicago, inside every sample square below.
CHICAGO_LAT = 41.88
CHICAGO_LNG = -87.63


def square(min_lng: float, min_lat: float, size: float) -> dict[str, Any]:
    """GeoJSON Polygon for an axis-aligned square."""
    max_lng = min_lng + size
    max_lat = min_lat + size
    return {
        "type": "Polygon",
        "coordinates": [
            [
                [min_lng, min_lat],
                [max_lng, min_lat],
                [max_lng, max_lat],
                [min_lng, max_lat],
                [min_lng, min_lat],
            ]
        ],
    }


def feature(properties: dict[str, Any], geometry: dict[str, Any]) -> dict[str, Any]:
    return {"type": "Feature", "properties": properties, "geometry": geometry}


def collection(*features: dict[str, Any]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}


# District number per sample layer at the Chicago point.
SAMPLE_DISTRICTS: dict[str, tuple[str, Any]] = {
    "congressional": ("CD119FP", "07"),
    "state_senate": ("SLDUST", "003"),
    "state_house": ("SLDLST", "005"),
    "city_ward": ("ward", 42),
    "cook_county": ("DISTRICT_INT", 2),
}


def sample_layer_geojson(layer_id: str) -> dict[str, Any]:
    """One square around the Chicago point plus one unrelated square to the west."""
    prop, value = SAMPLE_DISTRICTS[layer_id]
    return collection(
        feature({prop: "99"}, square(-89.5, 40.0, 0.5)),
        feature({prop: value}, square(-87.7, 41.8, 0.2)),
    )


@pytest.fixture
def layer_configs() -> dict[str, DistrictLayerConfig]:
    return {layer.layer_id: layer for layer in DEFAULT_JURISDICTION.layers}


@pytest.fixture
def sample_layers(layer_configs: dict[str, DistrictLayerConfig]) -> dict[str, BoundaryLayer]:
    """In-memory layers for the built-in jurisdiction."""
    return {
        layer_id: BoundaryLayer(config=config, features=features_from_geojson(sample_layer_geojson(layer_id)))
        for layer_id, config in layer_configs.items()
    }


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A data directory holding every sample layer, the state outline, and both rosters."""
    for layer in DEFAULT_JURISDICTION.layers:
        path = tmp_path / layer.path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(sample_layer_geojson(layer.layer_id)), encoding="utf-8")

    boundary = tmp_path / DEFAULT_JURISDICTION.boundary_path
    boundary.parent.mkdir(parents=True, exist_ok=True)
    boundary.write_text(
        json.dumps(collection(feature({"NAME": "Illinois"}, square(-91.5, 37.0, 5.0)))),
        encoding="utf-8",
    )

    (tmp_path / "officials.yaml").write_text(
        """
officials:
  - office_id: us_senate_1
    name: Senior Senator
    party: D
  - office_id: us_house
    name: Representative Seven
    party: D
    district: {layer: congressional, number: 7}
  - office_id: state_senate
    name: Senator Three
    district_layer: state_senate
    district_number: 3
  - office_id: state_house
    name: Broken Reference
    district: {layer: state_house, number: "five"}
""",
        encoding="utf-8",
    )
    (tmp_path / "endorsements.yaml").write_text(
        """
endorsements:
  - race: Governor
    candidate: Statewide Candidate
  - race: U.S. House IL-7
    candidate: District Candidate
    district: {layer: congressional, number: 7}
  - race: U.S. House IL-8
    candidate: Elsewhere Candidate
    district_type: congressional
    district_number: 8
""",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def settings(data_dir: Path) -> Settings:
    """Test application settings pointed at the sample data directory."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        data_dir=str(data_dir),
        geocoding_provider="geocode-earth",
        geocode_earth_api_key="test-key",
    )
