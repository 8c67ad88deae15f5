"""Geocode Earth (hosted Pelias) provider.

Uses the Geocode Earth API (https://geocode.earth/docs/) for search,
autocomplete, and reverse lookups. Responses are GeoJSON with ``[lng, lat]``
positions and a ``label`` property. Requires an API key.
"""

from typing import Any

from civic_atlas.lib.geocoder.base import (
    AutocompleteSuggestion,
    BaseGeocodingClient,
    GeocodeResult,
    coerce_lng_lat,
    first_string,
)

GEOCODE_EARTH_BASE_URL = "https://api.geocode.earth/v1"


class GeocodeEarthClient(BaseGeocodingClient):
    """Geocode Earth provider."""

    api_key_setting = "GEOCODE_EARTH_API_KEY"

    @property
    def provider_name(self) -> str:
        return "geocode-earth"

    def _focus_params(self) -> dict[str, str]:
        return {
            "focus.point.lat": str(self.scope.focus_point.lat),
            "focus.point.lon": str(self.scope.focus_point.lng),
        }

    @staticmethod
    def _features(data: Any) -> list[dict[str, Any]]:
        if not isinstance(data, dict):
            return []
        features = data.get("features")
        if not isinstance(features, list):
            return []
        return [f for f in features if isinstance(f, dict)]

    @staticmethod
    def _parse_feature(feature: dict[str, Any]) -> tuple[float, float, str] | None:
        geometry = feature.get("geometry") or {}
        coords = coerce_lng_lat(geometry.get("coordinates") if isinstance(geometry, dict) else None)
        label = first_string(feature.get("properties"), ("label",))
        if coords is None or not label:
            return None
        return coords[0], coords[1], label

    async def _search(self, address: str) -> list[GeocodeResult]:
        params = {
            "api_key": self._api_key,
            "text": address,
            "boundary.country": self.scope.country_code,
            "layers": "address",
            "size": "1",
            **self._focus_params(),
        }
        data = await self._get_json(f"{GEOCODE_EARTH_BASE_URL}/search", params=params)

        results: list[GeocodeResult] = []
        for feature in self._features(data):
            parsed = self._parse_feature(feature)
            if parsed is not None:
                lat, lng, label = parsed
                results.append(GeocodeResult(lat=lat, lng=lng, matched_address=label))
        return results

    async def _autocomplete(self, query: str) -> list[AutocompleteSuggestion]:
        bounds = self.scope.bounds
        params = {
            "api_key": self._api_key,
            "text": query,
            "boundary.rect.min_lat": str(bounds.min_lat),
            "boundary.rect.max_lat": str(bounds.max_lat),
            "boundary.rect.min_lon": str(bounds.min_lng),
            "boundary.rect.max_lon": str(bounds.max_lng),
            "layers": "address",
            "size": str(self.scope.autocomplete_limit),
            **self._focus_params(),
        }
        data = await self._get_json(f"{GEOCODE_EARTH_BASE_URL}/autocomplete", params=params)

        suggestions: list[AutocompleteSuggestion] = []
        for feature in self._features(data):
            parsed = self._parse_feature(feature)
            if parsed is not None:
                lat, lng, label = parsed
                suggestions.append(AutocompleteSuggestion(address=label, lat=lat, lng=lng))
        return suggestions

    async def _reverse(self, lat: float, lng: float) -> str | None:
        params = {
            "api_key": self._api_key,
            "point.lat": str(lat),
            "point.lon": str(lng),
            "size": "1",
        }
        data = await self._get_json(f"{GEOCODE_EARTH_BASE_URL}/reverse", params=params)

        features = self._features(data)
        if not features:
            return None
        return first_string(features[0].get("properties"), ("label",)) or None
