"""Geoapify Geocoding API provider.

Uses the Geoapify geocoding endpoints (https://apidocs.geoapify.com/docs/geocoding/)
with ``format=json`` results, which already carry separate ``lat``/``lon``
fields. Requests are filtered to the jurisdiction rectangle, state, and
country. Requires an API key.
"""

from typing import Any

from civic_atlas.lib.geocoder.base import (
    AutocompleteSuggestion,
    BaseGeocodingClient,
    GeocodeResult,
    coerce_lat_lng,
    first_string,
)

GEOAPIFY_BASE_URL = "https://api.geoapify.com/v1/geocode"


class GeoapifyClient(BaseGeocodingClient):
    """Geoapify geocoder provider."""

    api_key_setting = "GEOAPIFY_API_KEY"

    @property
    def provider_name(self) -> str:
        return "geoapify"

    def _filter(self) -> str:
        bounds = self.scope.bounds
        country = self.scope.country_code.lower()
        rect = f"rect:{bounds.min_lng},{bounds.min_lat},{bounds.max_lng},{bounds.max_lat}"
        state = f"statecode:{country}-{self.scope.state_code.lower()}"
        return f"{rect}|{state}|countrycode:{country}"

    def _bias(self) -> str:
        return f"proximity:{self.scope.focus_point.lng},{self.scope.focus_point.lat}"

    @staticmethod
    def _results(data: Any) -> list[dict[str, Any]]:
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            return []
        return [r for r in data["results"] if isinstance(r, dict)]

    @staticmethod
    def _parse_result(result: dict[str, Any]) -> tuple[float, float, str] | None:
        coords = coerce_lat_lng(result.get("lat"), result.get("lon"))
        address = first_string(result, ("formatted", "address_line1", "address_line2"))
        if coords is None or not address:
            return None
        return coords[0], coords[1], address

    async def _search(self, address: str) -> list[GeocodeResult]:
        params = {
            "text": address,
            "filter": self._filter(),
            "bias": self._bias(),
            "limit": "1",
            "format": "json",
            "apiKey": self._api_key,
        }
        data = await self._get_json(f"{GEOAPIFY_BASE_URL}/search", params=params)

        results: list[GeocodeResult] = []
        for item in self._results(data):
            parsed = self._parse_result(item)
            if parsed is not None:
                results.append(GeocodeResult(lat=parsed[0], lng=parsed[1], matched_address=parsed[2]))
        return results

    async def _autocomplete(self, query: str) -> list[AutocompleteSuggestion]:
        params = {
            "text": query,
            "filter": self._filter(),
            "bias": self._bias(),
            "limit": str(self.scope.autocomplete_limit),
            "format": "json",
            "apiKey": self._api_key,
        }
        data = await self._get_json(f"{GEOAPIFY_BASE_URL}/autocomplete", params=params)

        suggestions: list[AutocompleteSuggestion] = []
        for item in self._results(data):
            parsed = self._parse_result(item)
            if parsed is not None:
                suggestions.append(AutocompleteSuggestion(address=parsed[2], lat=parsed[0], lng=parsed[1]))
        return suggestions

    async def _reverse(self, lat: float, lng: float) -> str | None:
        params = {"lat": str(lat), "lon": str(lng), "format": "json", "apiKey": self._api_key}
        data = await self._get_json(f"{GEOAPIFY_BASE_URL}/reverse", params=params)

        results = self._results(data)
        if not results:
            return None
        return first_string(results[0], ("formatted", "address_line1")) or None
