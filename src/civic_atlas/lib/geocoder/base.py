"""Abstract geocoding client interface shared by every provider.

Providers only translate requests and responses. The base class owns the
cross-provider rules: coordinates are always returned as ``(lat, lng)``,
results outside the jurisdiction bounding box are discarded, autocomplete is
capped at the configured limit, and every transport or HTTP failure is raised
as a single ``GeocodingProviderError``.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger

from civic_atlas.lib.jurisdiction import BoundingBox, FocusPoint, JurisdictionConfig

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class GeocodeResult:
    """A forward-geocoded address."""

    lat: float
    lng: float
    matched_address: str


@dataclass(frozen=True)
class AutocompleteSuggestion:
    """One advisory address suggestion."""

    address: str
    lat: float
    lng: float


@dataclass(frozen=True)
class GeocodingScope:
    """Geographic scope every provider request is bounded to."""

    bounds: BoundingBox
    focus_point: FocusPoint
    country_code: str
    state_code: str
    autocomplete_limit: int = 8

    @classmethod
    def from_jurisdiction(cls, jurisdiction: JurisdictionConfig, autocomplete_limit: int = 8) -> "GeocodingScope":
        return cls(
            bounds=jurisdiction.bounds,
            focus_point=jurisdiction.focus_point,
            country_code=jurisdiction.country_code,
            state_code=jurisdiction.state_code,
            autocomplete_limit=autocomplete_limit,
        )


class GeocodingProviderError(Exception):
    """Raised when a geocoding provider experiences a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, connection error)
    from "address not found".

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class AddressNotFoundError(Exception):
    """Raised by forward geocoding when no in-bounds result exists."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__("Address not found")


def first_string(source: Mapping[str, Any] | None, keys: Sequence[str]) -> str:
    """Return the first non-blank string value among ``keys``, or ``""``."""
    if not isinstance(source, Mapping):
        return ""
    for key in keys:
        value = source.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return ""


def coerce_lng_lat(value: Any) -> tuple[float, float] | None:
    """Convert a GeoJSON ``[lng, lat]`` position into ``(lat, lng)``.

    Returns:
        ``(lat, lng)`` or None if the position is missing or non-numeric.
    """
    if not isinstance(value, list | tuple) or len(value) < 2:
        return None
    try:
        lng = float(value[0])
        lat = float(value[1])
    except (TypeError, ValueError):
        return None
    if lat != lat or lng != lng:  # NaN
        return None
    return lat, lng


def coerce_lat_lng(lat: Any, lng: Any) -> tuple[float, float] | None:
    """Convert separate latitude/longitude values into a float pair, or None."""
    try:
        lat_f = float(lat)
        lng_f = float(lng)
    except (TypeError, ValueError):
        return None
    if lat_f != lat_f or lng_f != lng_f:
        return None
    return lat_f, lng_f


class BaseGeocodingClient(ABC):
    """Abstract geocoding client. All providers must implement this."""

    #: Environment variable that supplies this provider's credential.
    api_key_setting: str = ""

    def __init__(self, scope: GeocodingScope, api_key: str | None = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        if self.requires_api_key and not (api_key and api_key.strip()):
            msg = f"Missing required setting: {self.api_key_setting or 'api_key'}"
            raise ValueError(msg)
        self._scope = scope
        self._api_key = (api_key or "").strip()
        self._timeout = timeout

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoding provider."""

    @property
    def requires_api_key(self) -> bool:
        """Whether this provider requires an API key to function."""
        return True

    @property
    def scope(self) -> GeocodingScope:
        return self._scope

    # Provider hooks

    @abstractmethod
    async def _search(self, address: str) -> list[GeocodeResult]:
        """Return forward-geocode candidates in provider ranking order."""

    @abstractmethod
    async def _autocomplete(self, query: str) -> list[AutocompleteSuggestion]:
        """Return autocomplete candidates in provider ranking order."""

    @abstractmethod
    async def _reverse(self, lat: float, lng: float) -> str | None:
        """Return the best address for a point, or None."""

    # Public contract

    async def geocode_address(self, address: str) -> GeocodeResult:
        """Geocode a free-text address to the best in-bounds match.

        Args:
            address: Free-text address.

        Returns:
            GeocodeResult with ``(lat, lng)`` and the matched address.

        Raises:
            AddressNotFoundError: If the provider returned nothing inside
                the jurisdiction bounding box.
            GeocodingProviderError: On timeout, transport, or HTTP errors.
        """
        candidates = await self._search(address)
        for candidate in candidates:
            if self._scope.bounds.contains(candidate.lat, candidate.lng):
                return candidate

        if candidates:
            logger.info(f"{self.provider_name}: discarded {len(candidates)} out-of-bounds geocode result(s)")
        raise AddressNotFoundError(address)

    async def autocomplete_address(self, query: str) -> list[AutocompleteSuggestion]:
        """Suggest in-bounds addresses for a partial query.

        Returns:
            At most ``autocomplete_limit`` suggestions; empty when nothing
            matches (never raises for "no results").

        Raises:
            GeocodingProviderError: On timeout, transport, or HTTP errors.
        """
        suggestions = await self._autocomplete(query)
        in_bounds = [s for s in suggestions if self._scope.bounds.contains(s.lat, s.lng)]
        return in_bounds[: self._scope.autocomplete_limit]

    async def reverse_geocode(self, lat: float, lng: float) -> str | None:
        """Return the address nearest a point, or None when the provider has none.

        Raises:
            GeocodingProviderError: On timeout, transport, or HTTP errors.
        """
        return await self._reverse(lat, lng)

    # HTTP

    async def _get_json(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self._request_json("GET", url, params=params, headers=headers)

    async def _post_json(
        self,
        url: str,
        body: Any,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self._request_json("POST", url, headers=headers, body=body)

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> Any:
        """Issue a request with the configured timeout and decode the JSON payload.

        Raises:
            GeocodingProviderError: On timeout, connection, or non-success status.
        """
        name = self.provider_name
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                if method == "POST":
                    response = await client.post(url, headers=dict(headers or {}), json=body)
                else:
                    response = await client.get(url, params=dict(params or {}), headers=dict(headers or {}))

            try:
                payload = response.json()
            except ValueError:
                payload = None

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                details = first_string(payload, ("message", "error_message"))
                if not details and isinstance(payload, Mapping):
                    details = first_string(payload.get("error"), ("message",))
                suffix = f": {details}" if details else ""
                logger.warning(f"{name} geocoder HTTP error {status_code}")
                raise GeocodingProviderError(
                    name,
                    f"Geocoding request failed ({status_code}){suffix}",
                    status_code=status_code,
                ) from e

            return payload

        except httpx.TimeoutException as e:
            logger.warning(f"{name} geocoder timeout (query redacted)")
            raise GeocodingProviderError(name, "Geocoding request timed out") from e
        except httpx.TransportError as e:
            logger.warning(f"{name} geocoder connection error")
            raise GeocodingProviderError(name, "Connection to geocoding provider failed") from e
        except GeocodingProviderError:
            raise
        except Exception as e:
            logger.exception(f"{name} geocoder unexpected error")
            raise GeocodingProviderError(name, f"Unexpected error: {e}") from e
