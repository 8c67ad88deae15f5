"""Lookup service: orchestrates geocoding, jurisdiction checks, district resolution, and matching."""

import asyncio

from loguru import logger

from civic_atlas.core.config import Settings
from civic_atlas.core.lazy import LazyValue
from civic_atlas.lib.districts import get_district_shapes, resolve_districts, shapes_bbox
from civic_atlas.lib.geocoder import (
    BaseGeocodingClient,
    GeocodingClientCache,
    GeocodingProviderError,
    GeocodingScope,
)
from civic_atlas.lib.jurisdiction import parse_coordinates, validate_jurisdiction_coordinates
from civic_atlas.lib.matching import match_endorsements, match_officials
from civic_atlas.schemas.lookup import (
    CoordinatesResponse,
    EndorsementResponse,
    LookupResponse,
    OfficialResponse,
    SuggestionResponse,
)
from civic_atlas.services.jurisdiction_data import JurisdictionData

MIN_AUTOCOMPLETE_LENGTH = 3
MISSING_INPUT_MESSAGE = "Either 'address' or both 'lat' and 'lng' must be provided"


class LookupService:
    """Answers lookups against process-wide jurisdiction data.

    Args:
        settings: Application settings.
        data: Lazily loaded jurisdiction data shared by all requests.
        geocoders: Cache holding the active geocoding client.
    """

    def __init__(
        self,
        settings: Settings,
        data: LazyValue[JurisdictionData],
        geocoders: GeocodingClientCache | None = None,
    ) -> None:
        self._settings = settings
        self._data = data
        self._geocoders = geocoders or GeocodingClientCache()

    @property
    def data(self) -> JurisdictionData:
        return self._data.get()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_loaded(self) -> bool:
        return self._data.is_initialized

    async def warm_up(self) -> None:
        """Load jurisdiction data off the event loop.

        Raises:
            ValueError: If the jurisdiction or roster files are invalid.
        """
        if self._data.is_initialized:
            return
        await asyncio.to_thread(self._data.get)
        logger.info(f"Jurisdiction data ready: {self.data.jurisdiction.name}")

    def geocoder(self) -> BaseGeocodingClient:
        """Return the active geocoding client.

        Raises:
            GeocodingProviderError: If the configured provider cannot be built
                (e.g., its API key is missing).
        """
        scope = GeocodingScope.from_jurisdiction(
            self.data.jurisdiction,
            autocomplete_limit=self._settings.geocoding_autocomplete_limit,
        )
        try:
            return self._geocoders.get(self._settings, scope)
        except ValueError as e:
            logger.error(f"Geocoding provider unavailable: {e}")
            raise GeocodingProviderError(self._settings.geocoding_provider, str(e)) from e

    async def lookup(
        self,
        address: str | None = None,
        lat: float | str | None = None,
        lng: float | str | None = None,
    ) -> LookupResponse:
        """Resolve districts and roster matches for an address or a point.

        An address takes precedence over coordinates when both are given.

        Args:
            address: Free-text address to geocode.
            lat: Latitude, used when no address is given.
            lng: Longitude, used when no address is given.

        Returns:
            LookupResponse with districts and either officials or endorsements,
            depending on ``settings.roster_mode``.

        Raises:
            ValueError: Missing/invalid input, or a point outside the jurisdiction.
            AddressNotFoundError: The address has no in-bounds geocode result.
            GeocodingProviderError: The geocoding provider failed.
        """
        address = address.strip() if address else None
        has_point = lat not in (None, "") and lng not in (None, "")
        if not address and not has_point:
            raise ValueError(MISSING_INPUT_MESSAGE)

        await self.warm_up()
        data = self.data
        address_used: str | None = None
        if address:
            result = await self.geocoder().geocode_address(address)
            lat_f, lng_f = result.lat, result.lng
            address_used = result.matched_address
        else:
            lat_f, lng_f = parse_coordinates(lat, lng)

        validate_jurisdiction_coordinates(lat_f, lng_f, data.jurisdiction)

        districts = resolve_districts(lat_f, lng_f, data.layers)
        response = LookupResponse(
            address_used=address_used,
            coordinates=CoordinatesResponse(lat=lat_f, lng=lng_f),
            districts=districts,
        )

        if self._settings.roster_mode == "endorsements":
            matched = match_endorsements(districts, data.endorsements)
            response.endorsements = [EndorsementResponse.model_validate(e) for e in matched]
        else:
            rows = match_officials(districts, data.officials, data.jurisdiction.office_slots)
            response.officials = [OfficialResponse.model_validate(o) for o in rows]

        if self._settings.show_district_shapes:
            response.district_shapes = get_district_shapes(
                districts,
                data.layers,
                boundary=data.boundary,
                tolerance=self._settings.district_shape_tolerance,
            )
            response.shapes_bbox = shapes_bbox(response.district_shapes)

        return response

    async def autocomplete(self, query: str | None) -> list[SuggestionResponse]:
        """Return advisory suggestions; queries shorter than three characters yield none.

        Raises:
            GeocodingProviderError: The geocoding provider failed.
        """
        query = (query or "").strip()
        if len(query) < MIN_AUTOCOMPLETE_LENGTH:
            return []

        suggestions = await self.geocoder().autocomplete_address(query)
        return [SuggestionResponse.model_validate(s) for s in suggestions]

    async def reverse(self, lat: float | str | None, lng: float | str | None) -> str | None:
        """Return the nearest address for a point, or None.

        Raises:
            ValueError: Invalid coordinates.
            GeocodingProviderError: The geocoding provider failed.
        """
        lat_f, lng_f = parse_coordinates(lat, lng)
        return await self.geocoder().reverse_geocode(lat_f, lng_f)
