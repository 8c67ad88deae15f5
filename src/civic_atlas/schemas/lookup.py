"""Pydantic v2 schemas for lookup, autocomplete, and reverse geocoding responses."""

from typing import Any

from pydantic import BaseModel, Field

from civic_atlas.lib.matching import MatchStatus


class CoordinatesResponse(BaseModel):
    """A WGS84 point."""

    lat: float
    lng: float


class DistrictRefResponse(BaseModel):
    """A district reference ``{layer, number}``."""

    model_config = {"from_attributes": True}

    layer: str
    number: int | float


class OfficialResponse(BaseModel):
    """One row per configured office slot."""

    model_config = {"from_attributes": True}

    office_id: str
    office_label: str
    status: MatchStatus
    name: str | None = None
    party: str | None = None
    url: str | None = None
    phone: str | None = None
    district: DistrictRefResponse | None = None
    shape_key: str | None = Field(
        default=None,
        description='Key into district_shapes: a layer id or "statewide"',
    )
    note: str | None = None


class EndorsementResponse(BaseModel):
    """An endorsement applicable to the looked-up location."""

    model_config = {"from_attributes": True}

    race: str
    candidate: str
    party: str | None = None
    district: DistrictRefResponse | None = None
    district_layer: str | None = None
    district_type: str | None = None


class LookupResponse(BaseModel):
    """Districts and matched roster rows for one location."""

    address_used: str | None = None
    coordinates: CoordinatesResponse
    districts: dict[str, int | None]
    officials: list[OfficialResponse] | None = None
    endorsements: list[EndorsementResponse] | None = None
    district_shapes: dict[str, dict[str, Any]] | None = None
    shapes_bbox: tuple[float, float, float, float] | None = Field(
        default=None,
        description="(min_lng, min_lat, max_lng, max_lat) covering the returned district shapes",
    )


class SuggestionResponse(BaseModel):
    """An advisory address suggestion."""

    model_config = {"from_attributes": True}

    address: str
    lat: float
    lng: float


class AutocompleteResponse(BaseModel):
    """Autocomplete suggestions (possibly empty)."""

    suggestions: list[SuggestionResponse] = Field(default_factory=list)


class ReverseResponse(BaseModel):
    """Reverse geocoding result."""

    address: str | None = None


class HealthResponse(BaseModel):
    """Liveness check response."""

    status: str = "healthy"
