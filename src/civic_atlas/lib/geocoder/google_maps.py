"""Google Maps provider.

Forward and reverse geocoding use the Geocoding API v4beta
(https://developers.google.com/maps/documentation/geocoding); autocomplete
uses Places API (New) predictions followed by one Place Details request per
prediction. Requires an API key sent in the ``X-Goog-Api-Key`` header.
"""

import asyncio
from typing import Any

from loguru import logger

from civic_atlas.lib.geocoder.base import (
    AutocompleteSuggestion,
    BaseGeocodingClient,
    GeocodeResult,
    GeocodingProviderError,
    coerce_lat_lng,
    first_string,
)

GOOGLE_PLACES_BASE_URL = "https://places.googleapis.com/v1"
GOOGLE_GEOCODING_BASE_URL = "https://geocode.googleapis.com/v4beta/geocode"


def place_resource(prediction: Any) -> str | None:
    """Return the ``places/<id>`` resource name for an autocomplete prediction."""
    if not isinstance(prediction, dict):
        return None
    resource = first_string(prediction, ("place",))
    if resource.startswith("places/"):
        return resource
    place_id = first_string(prediction, ("placeId",))
    if place_id:
        return f"places/{place_id}"
    return None


def _location(item: dict[str, Any]) -> tuple[float, float] | None:
    location = item.get("location")
    if not isinstance(location, dict):
        return None
    return coerce_lat_lng(location.get("latitude"), location.get("longitude"))


class GoogleMapsClient(BaseGeocodingClient):
    """Google Maps Geocoding + Places provider."""

    api_key_setting = "GOOGLE_MAPS_API_KEY"

    @property
    def provider_name(self) -> str:
        return "google-maps"

    def _headers(self, field_mask: str) -> dict[str, str]:
        return {"X-Goog-Api-Key": self._api_key, "X-Goog-FieldMask": field_mask}

    def _region_code(self) -> str:
        return self.scope.country_code.lower()

    def _location_bias_params(self) -> dict[str, str]:
        bounds = self.scope.bounds
        return {
            "regionCode": self._region_code(),
            "locationBias.rectangle.low.latitude": str(bounds.min_lat),
            "locationBias.rectangle.low.longitude": str(bounds.min_lng),
            "locationBias.rectangle.high.latitude": str(bounds.max_lat),
            "locationBias.rectangle.high.longitude": str(bounds.max_lng),
        }

    async def _search(self, address: str) -> list[GeocodeResult]:
        params = {"addressQuery": address, **self._location_bias_params()}
        data = await self._get_json(
            f"{GOOGLE_GEOCODING_BASE_URL}/address",
            params=params,
            headers=self._headers("results.formattedAddress,results.location"),
        )

        items = data.get("results") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []

        results: list[GeocodeResult] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            coords = _location(item)
            matched = first_string(item, ("formattedAddress",))
            if coords is None or not matched:
                continue
            results.append(GeocodeResult(lat=coords[0], lng=coords[1], matched_address=matched))
        return results

    async def _place_suggestion(self, resource: str) -> AutocompleteSuggestion | None:
        data = await self._get_json(
            f"{GOOGLE_PLACES_BASE_URL}/{resource}",
            headers=self._headers("formattedAddress,location"),
        )
        if not isinstance(data, dict):
            return None
        coords = _location(data)
        address = first_string(data, ("formattedAddress",))
        if coords is None or not address:
            return None
        return AutocompleteSuggestion(address=address, lat=coords[0], lng=coords[1])

    async def _safe_place_suggestion(self, resource: str) -> AutocompleteSuggestion | None:
        try:
            return await self._place_suggestion(resource)
        except GeocodingProviderError as e:
            logger.warning(f"google-maps place details failed for {resource}: {e.message}")
            return None

    async def _autocomplete(self, query: str) -> list[AutocompleteSuggestion]:
        bounds = self.scope.bounds
        body = {
            "input": query,
            "includedRegionCodes": [self._region_code()],
            "locationRestriction": {
                "rectangle": {
                    "low": {"latitude": bounds.min_lat, "longitude": bounds.min_lng},
                    "high": {"latitude": bounds.max_lat, "longitude": bounds.max_lng},
                },
            },
        }
        data = await self._post_json(
            f"{GOOGLE_PLACES_BASE_URL}/places:autocomplete",
            body,
            headers=self._headers("suggestions.placePrediction.place,suggestions.placePrediction.placeId"),
        )

        raw = data.get("suggestions", []) if isinstance(data, dict) else []
        resources: list[str] = []
        for item in raw if isinstance(raw, list) else []:
            if not isinstance(item, dict):
                continue
            resource = place_resource(item.get("placePrediction"))
            if resource:
                resources.append(resource)
        resources = resources[: self.scope.autocomplete_limit]

        details = await asyncio.gather(*(self._safe_place_suggestion(r) for r in resources))
        return [d for d in details if d is not None]

    async def _reverse(self, lat: float, lng: float) -> str | None:
        params = {"locationQuery": f"{lat},{lng}", "regionCode": self._region_code()}
        data = await self._get_json(
            f"{GOOGLE_GEOCODING_BASE_URL}/location",
            params=params,
            headers=self._headers("results.formattedAddress"),
        )

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results:
            return None
        return first_string(results[0], ("formattedAddress",)) or None
