"""Built-in sample jurisdiction: the Illinois district map pack."""

from civic_atlas.lib.jurisdiction.config import (
    BoundingBox,
    DistrictLayerConfig,
    FocusPoint,
    JurisdictionConfig,
    OfficeSlot,
)

_STATE_SLUG = "illinois"
_MAP_ROOT = f"district-maps/{_STATE_SLUG}"

DISTRICT_LAYERS: tuple[DistrictLayerConfig, ...] = (
    DistrictLayerConfig(
        layer_id="congressional",
        label="Congressional",
        path=f"{_MAP_ROOT}/congressional/districts.geojson",
        number_property="CD119FP",
        number_property_aliases=("cd119fp",),
    ),
    DistrictLayerConfig(
        layer_id="state_senate",
        label="State Senate",
        path=f"{_MAP_ROOT}/state_senate/districts.geojson",
        number_property="SLDUST",
        number_property_aliases=("sldust",),
    ),
    DistrictLayerConfig(
        layer_id="state_house",
        label="State House",
        path=f"{_MAP_ROOT}/state_house/districts.geojson",
        number_property="SLDLST",
        number_property_aliases=("sldlst",),
    ),
    DistrictLayerConfig(
        layer_id="city_ward",
        label="City Ward",
        path=f"{_MAP_ROOT}/chicago_ward/districts.geojson",
        number_property="ward",
        number_property_aliases=("ward", "ward_id", "WARD"),
    ),
    DistrictLayerConfig(
        layer_id="cook_county",
        label="Cook County",
        path=f"{_MAP_ROOT}/cook_county/districts.geojson",
        number_property="DISTRICT_INT",
        number_property_aliases=("district_int",),
    ),
)

OFFICE_SLOTS: tuple[OfficeSlot, ...] = (
    OfficeSlot(office_id="us_senate_1", office_label="U.S. Senator", statewide=True),
    OfficeSlot(office_id="us_senate_2", office_label="U.S. Senator", statewide=True),
    OfficeSlot(office_id="us_house", office_label="U.S. Representative", layer="congressional"),
    OfficeSlot(office_id="state_senate", office_label="State Senator", layer="state_senate"),
    OfficeSlot(office_id="state_house", office_label="State Representative", layer="state_house"),
    OfficeSlot(office_id="city_ward", office_label="Alderperson", layer="city_ward"),
    OfficeSlot(office_id="cook_county", office_label="Cook County Commissioner", layer="cook_county"),
)

DEFAULT_JURISDICTION = JurisdictionConfig(
    name="Illinois (Sample Pack)",
    country_code="US",
    state_code="IL",
    state_name="Illinois",
    state_slug=_STATE_SLUG,
    bounds=BoundingBox(min_lat=36.97, max_lat=42.51, min_lng=-91.51, max_lng=-87.02),
    focus_point=FocusPoint(lat=41.8781, lng=-87.6298),
    map_root=_MAP_ROOT,
    boundary_path=f"{_MAP_ROOT}/boundary/boundary.geojson",
    layers=DISTRICT_LAYERS,
    office_slots=OFFICE_SLOTS,
)
