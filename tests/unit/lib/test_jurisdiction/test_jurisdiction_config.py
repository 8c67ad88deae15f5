"""Unit tests for jurisdiction configuration and the built-in sample pack."""

from pathlib import Path

import pytest

from civic_atlas.lib.jurisdiction import (
    DEFAULT_JURISDICTION,
    BoundingBox,
    DistrictLayerConfig,
    OfficeSlot,
    jurisdiction_from_mapping,
    load_jurisdiction,
    number_property_candidates,
)


class TestBoundingBox:
    """Tests for BoundingBox."""

    def test_contains_inclusive_edges(self) -> None:
        box = BoundingBox(min_lat=36.97, max_lat=42.51, min_lng=-91.51, max_lng=-87.02)
        assert box.contains(41.88, -87.63)
        assert box.contains(36.97, -91.51)
        assert box.contains(42.51, -87.02)
        assert not box.contains(42.52, -87.63)
        assert not box.contains(41.88, -87.01)

    def test_inverted_box_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not exceed"):
            BoundingBox(min_lat=42.0, max_lat=41.0, min_lng=-88.0, max_lng=-87.0)


class TestNumberPropertyCandidates:
    """Tests for district-number attribute priority order."""

    def test_case_variants_then_aliases(self) -> None:
        layer = DistrictLayerConfig(
            layer_id="city_ward",
            label="Ward",
            path="ward.geojson",
            number_property="Ward",
            number_property_aliases=("ward_id", "ward"),
        )
        assert number_property_candidates(layer) == ["Ward", "ward", "WARD", "ward_id"]

    def test_duplicates_removed(self) -> None:
        layer = DistrictLayerConfig(
            layer_id="congressional",
            label="Congressional",
            path="cd.geojson",
            number_property="CD119FP",
            number_property_aliases=("cd119fp", "CD119FP"),
        )
        assert number_property_candidates(layer) == ["CD119FP", "cd119fp"]


class TestOfficeSlot:
    """Tests for office slot shape predicates."""

    def test_statewide(self) -> None:
        slot = OfficeSlot(office_id="us_senate_1", office_label="U.S. Senator", statewide=True)
        assert slot.is_statewide
        assert not slot.is_layer_bound

    def test_layer_bound(self) -> None:
        slot = OfficeSlot(office_id="us_house", office_label="U.S. Representative", layer="congressional")
        assert slot.is_layer_bound
        assert not slot.is_statewide

    def test_both_set_is_neither(self) -> None:
        slot = OfficeSlot(office_id="bad", office_label="Bad", statewide=True, layer="congressional")
        assert not slot.is_statewide
        assert not slot.is_layer_bound

    def test_neither_set(self) -> None:
        slot = OfficeSlot(office_id="bad", office_label="Bad")
        assert not slot.is_statewide
        assert not slot.is_layer_bound


class TestDefaultJurisdiction:
    """Tests for the built-in Illinois sample pack."""

    def test_layers_in_order(self) -> None:
        assert DEFAULT_JURISDICTION.layer_ids == [
            "congressional",
            "state_senate",
            "state_house",
            "city_ward",
            "cook_county",
        ]

    def test_seven_office_slots(self) -> None:
        ids = [slot.office_id for slot in DEFAULT_JURISDICTION.office_slots]
        assert ids == [
            "us_senate_1",
            "us_senate_2",
            "us_house",
            "state_senate",
            "state_house",
            "city_ward",
            "cook_county",
        ]

    def test_every_layer_bound_slot_names_a_configured_layer(self) -> None:
        for slot in DEFAULT_JURISDICTION.office_slots:
            assert slot.is_statewide or DEFAULT_JURISDICTION.get_layer(slot.layer or "") is not None

    def test_bounds_and_focus(self) -> None:
        assert DEFAULT_JURISDICTION.bounds.contains(41.8781, -87.6298)
        assert DEFAULT_JURISDICTION.focus_point.lat == pytest.approx(41.8781)

    def test_get_unknown_layer(self) -> None:
        assert DEFAULT_JURISDICTION.get_layer("school_board") is None


class TestJurisdictionFromMapping:
    """Tests for building a jurisdiction from a parsed mapping."""

    def _mapping(self) -> dict:
        return {
            "name": "Testland",
            "state": {"code": "TL", "name": "Testland", "slug": "testland"},
            "bounds": {"min_lat": 10, "max_lat": 20, "min_lng": -30, "max_lng": -20},
            "layers": {
                "council": {"label": "Council", "path": "council.geojson", "number_property": "DIST"},
            },
            "office_slots": [
                {"office_id": "mayor", "office_label": "Mayor", "statewide": True},
                {"office_id": "council", "office_label": "Council Member", "layer": "council"},
            ],
        }

    def test_full_mapping(self) -> None:
        config = jurisdiction_from_mapping(self._mapping())
        assert config.name == "Testland"
        assert config.state_code == "TL"
        assert config.layer_ids == ["council"]
        assert config.get_layer("council").number_property == "DIST"
        assert config.office_slots[0].is_statewide
        assert config.office_slots[1].layer == "council"
        assert config.boundary_path == "district-maps/testland/boundary/boundary.geojson"

    def test_focus_defaults_to_center(self) -> None:
        config = jurisdiction_from_mapping(self._mapping())
        assert config.focus_point.lat == pytest.approx(15.0)
        assert config.focus_point.lng == pytest.approx(-25.0)

    def test_missing_bounds_rejected(self) -> None:
        data = self._mapping()
        del data["bounds"]
        with pytest.raises(ValueError, match="bounds"):
            jurisdiction_from_mapping(data)

    def test_malformed_bounds_rejected(self) -> None:
        data = self._mapping()
        data["bounds"] = {"min_lat": 10}
        with pytest.raises(ValueError, match="malformed"):
            jurisdiction_from_mapping(data)

    def test_layer_without_path_rejected(self) -> None:
        data = self._mapping()
        data["layers"]["council"].pop("path")
        with pytest.raises(ValueError, match="path"):
            jurisdiction_from_mapping(data)

    def test_slots_must_be_list(self) -> None:
        data = self._mapping()
        data["office_slots"] = {"mayor": {}}
        with pytest.raises(ValueError, match="office_slots"):
            jurisdiction_from_mapping(data)


class TestLoadJurisdiction:
    """Tests for the YAML loader."""

    def test_loads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "jurisdiction.yaml"
        path.write_text(
            """
name: Testland
bounds: {min_lat: 10, max_lat: 20, min_lng: -30, max_lng: -20}
layers:
  council: {path: council.geojson, number_property: DIST, number_property_aliases: [dist]}
office_slots:
  - {office_id: council, layer: council}
""",
            encoding="utf-8",
        )
        config = load_jurisdiction(path)
        assert config.name == "Testland"
        assert config.layers[0].number_property_aliases == ("dist",)
        assert config.office_slots[0].office_label == "council"

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "jurisdiction.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_jurisdiction(path)
