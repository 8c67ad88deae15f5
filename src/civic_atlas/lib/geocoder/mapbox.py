"""Mapbox Geocoding API v6 provider.

Uses the Mapbox Geocoding API v6
(https://docs.mapbox.com/api/search/geocoding-v6/)
for forward, autocomplete, and reverse lookups. Requires an access token.
"""

from typing import Any

from civic_atlas.lib.geocoder.base import (
    AutocompleteSuggestion,
    BaseGeocodingClient,
    GeocodeResult,
    coerce_lng_lat,
    first_string,
)

MAPBOX_BASE_URL = "https://api.mapbox.com/search/geocode/v6"


class MapboxClient(BaseGeocodingClient):
    """Mapbox geocoder provider."""

    api_key_setting = "MAPBOX_ACCESS_TOKEN"

    @property
    def provider_name(self) -> str:
        return "mapbox"

    def _scope_params(self) -> dict[str, str]:
        bounds = self.scope.bounds
        focus = self.scope.focus_point
        return {
            "country": self.scope.country_code.lower(),
            "types": "address,street",
            "proximity": f"{focus.lng},{focus.lat}",
            "bbox": f"{bounds.min_lng},{bounds.min_lat},{bounds.max_lng},{bounds.max_lat}",
            "access_token": self._api_key,
        }

    @staticmethod
    def _address(feature: dict[str, Any]) -> str:
        """Pick a display address from a v6 feature (falls back to v5 fields)."""
        return first_string(feature.get("properties"), ("full_address", "name")) or first_string(
            feature, ("place_name", "text")
        )

    @classmethod
    def _parse_features(cls, data: Any) -> list[tuple[float, float, str]]:
        if not isinstance(data, dict) or not isinstance(data.get("features"), list):
            return []

        parsed: list[tuple[float, float, str]] = []
        for feature in data["features"]:
            if not isinstance(feature, dict):
                continue
            geometry = feature.get("geometry")
            coords = coerce_lng_lat(geometry.get("coordinates") if isinstance(geometry, dict) else None)
            address = cls._address(feature)
            if coords is None or not address:
                continue
            parsed.append((coords[0], coords[1], address))
        return parsed

    async def _search(self, address: str) -> list[GeocodeResult]:
        params = {"q": address, "limit": "1", "autocomplete": "false", **self._scope_params()}
        data = await self._get_json(f"{MAPBOX_BASE_URL}/forward", params=params)
        return [GeocodeResult(lat=lat, lng=lng, matched_address=addr) for lat, lng, addr in self._parse_features(data)]

    async def _autocomplete(self, query: str) -> list[AutocompleteSuggestion]:
        params = {
            "q": query,
            "limit": str(self.scope.autocomplete_limit),
            "autocomplete": "true",
            **self._scope_params(),
        }
        data = await self._get_json(f"{MAPBOX_BASE_URL}/forward", params=params)
        return [
            AutocompleteSuggestion(address=addr, lat=lat, lng=lng) for lat, lng, addr in self._parse_features(data)
        ]

    async def _reverse(self, lat: float, lng: float) -> str | None:
        params = {
            "longitude": str(lng),
            "latitude": str(lat),
            "limit": "1",
            "access_token": self._api_key,
        }
        data = await self._get_json(f"{MAPBOX_BASE_URL}/reverse", params=params)

        if not isinstance(data, dict) or not isinstance(data.get("features"), list) or not data["features"]:
            return None
        feature = data["features"][0]
        if not isinstance(feature, dict):
            return None
        return self._address(feature) or None
