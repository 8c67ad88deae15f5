"""Unit tests for GeoJSON boundary layer loading."""

import json
from pathlib import Path

import pytest

from civic_atlas.lib.districts import (
    features_from_geojson,
    load_jurisdiction_boundary,
    load_layers,
    read_layer_geojson,
)
from civic_atlas.lib.jurisdiction import DEFAULT_JURISDICTION, DistrictLayerConfig

LAYER = DistrictLayerConfig(layer_id="council", label="Council", path="council.geojson", number_property="DIST")

POLYGON = {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]}


class TestFeaturesFromGeojson:
    """Tests for features_from_geojson."""

    def test_keeps_polygons_in_order(self) -> None:
        data = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "properties": {"DIST": 2}, "geometry": POLYGON},
                {"type": "Feature", "properties": {"DIST": 1}, "geometry": POLYGON},
            ],
        }
        features = features_from_geojson(data)
        assert [f.properties["DIST"] for f in features] == [2, 1]

    def test_skips_points_and_null_geometry(self) -> None:
        data = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [0, 0]}},
                {"type": "Feature", "properties": {}, "geometry": None},
                {"type": "Feature", "properties": None, "geometry": POLYGON},
            ],
        }
        features = features_from_geojson(data)
        assert len(features) == 1
        assert features[0].properties == {}

    def test_rejects_non_collection(self) -> None:
        with pytest.raises(ValueError, match="FeatureCollection"):
            features_from_geojson({"type": "Feature", "geometry": POLYGON})

    def test_covers_boundary(self) -> None:
        data = {"type": "FeatureCollection", "features": [{"type": "Feature", "properties": {}, "geometry": POLYGON}]}
        feature = features_from_geojson(data)[0]
        assert feature.covers(0.5, 0.5)
        assert feature.covers(1.0, 0.5)
        assert not feature.covers(1.5, 0.5)


class TestLoadLayers:
    """Tests for reading layers from a data directory."""

    def test_read_layer_geojson(self, tmp_path: Path) -> None:
        path = tmp_path / "council.geojson"
        path.write_text(
            json.dumps({"type": "FeatureCollection", "features": [{"properties": {"DIST": 1}, "geometry": POLYGON}]}),
            encoding="utf-8",
        )
        layer = read_layer_geojson(path, LAYER)
        assert layer.layer_id == "council"
        assert len(layer) == 1

    def test_missing_file_becomes_empty_layer(self, tmp_path: Path) -> None:
        layers = load_layers(tmp_path, [LAYER])
        assert list(layers) == ["council"]
        assert len(layers["council"]) == 0

    def test_invalid_json_becomes_empty_layer(self, tmp_path: Path) -> None:
        (tmp_path / "council.geojson").write_text("{not json", encoding="utf-8")
        layers = load_layers(tmp_path, [LAYER])
        assert len(layers["council"]) == 0

    def test_sample_data_dir(self, data_dir: Path) -> None:
        layers = load_layers(data_dir, DEFAULT_JURISDICTION.layers)
        assert list(layers) == DEFAULT_JURISDICTION.layer_ids
        assert all(len(layer) == 2 for layer in layers.values())


class TestLoadJurisdictionBoundary:
    """Tests for the jurisdiction outline loader."""

    def test_loads_first_feature(self, data_dir: Path) -> None:
        boundary = load_jurisdiction_boundary(data_dir, DEFAULT_JURISDICTION)
        assert boundary is not None
        assert boundary.geom_type == "Polygon"

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_jurisdiction_boundary(tmp_path, DEFAULT_JURISDICTION) is None
