"""Geocoder library: multi-provider address geocoding scoped to a jurisdiction.

Public API:
    - BaseGeocodingClient: Abstract provider interface
    - GeocodeResult / AutocompleteSuggestion: Result dataclasses
    - GeocodingScope: Bounds, focus point, and limits shared by all providers
    - GeocodingProviderError: Normalized upstream failure
    - AddressNotFoundError: No in-bounds forward geocode result
    - GeocodeEarthClient / MapboxClient / GeoapifyClient / GoogleMapsClient
    - get_geocoder: Provider factory/registry
    - create_geocoding_client: Build the provider selected in settings
    - GeocodingClientCache: Process-wide cached client
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from loguru import logger

from civic_atlas.lib.geocoder.base import (
    DEFAULT_TIMEOUT,
    AddressNotFoundError,
    AutocompleteSuggestion,
    BaseGeocodingClient,
    GeocodeResult,
    GeocodingProviderError,
    GeocodingScope,
)
from civic_atlas.lib.geocoder.geoapify import GeoapifyClient
from civic_atlas.lib.geocoder.geocode_earth import GeocodeEarthClient
from civic_atlas.lib.geocoder.google_maps import GoogleMapsClient
from civic_atlas.lib.geocoder.mapbox import MapboxClient

if TYPE_CHECKING:
    from civic_atlas.core.config import Settings

# Provider registry
_PROVIDERS: dict[str, type[BaseGeocodingClient]] = {
    "geocode-earth": GeocodeEarthClient,
    "mapbox": MapboxClient,
    "geoapify": GeoapifyClient,
    "google-maps": GoogleMapsClient,
}


def get_available_providers() -> list[str]:
    """Return the names of all registered geocoding providers.

    Returns:
        Sorted list of provider name strings.
    """
    return sorted(_PROVIDERS.keys())


def get_geocoder(provider: str, scope: GeocodingScope, **kwargs: Any) -> BaseGeocodingClient:
    """Get a geocoding client instance by provider name.

    Args:
        provider: Provider name (e.g., "geocode-earth").
        scope: Jurisdiction scope applied to every request.
        **kwargs: Additional arguments forwarded to the provider constructor
            (e.g., ``api_key="..."``, ``timeout=2.0``).

    Returns:
        An instance of the requested provider.

    Raises:
        ValueError: If the provider is not registered or its API key is missing.
    """
    cls = _PROVIDERS.get(provider)
    if cls is None:
        msg = f"Unknown geocoding provider: {provider!r}. Available: {list(_PROVIDERS.keys())}"
        raise ValueError(msg)
    return cls(scope, **kwargs)


def create_geocoding_client(settings: Settings, scope: GeocodingScope) -> BaseGeocodingClient:
    """Build the provider selected by ``settings.geocoding_provider``."""
    provider = settings.geocoding_provider
    return get_geocoder(
        provider,
        scope,
        api_key=settings.provider_api_key(provider),
        timeout=settings.geocoding_timeout,
    )


class GeocodingClientCache:
    """Holds one client per process and rebuilds it when the provider changes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._client: BaseGeocodingClient | None = None

    def get(self, settings: Settings, scope: GeocodingScope) -> BaseGeocodingClient:
        with self._lock:
            current = self._client
            if current is not None and current.provider_name == settings.geocoding_provider:
                return current
            client = create_geocoding_client(settings, scope)
            logger.info(f"Geocoding provider initialized: {client.provider_name}")
            self._client = client
            return client

    def clear(self) -> None:
        with self._lock:
            self._client = None


__all__ = [
    "DEFAULT_TIMEOUT",
    "AddressNotFoundError",
    "AutocompleteSuggestion",
    "BaseGeocodingClient",
    "GeoapifyClient",
    "GeocodeEarthClient",
    "GeocodeResult",
    "GeocodingClientCache",
    "GeocodingProviderError",
    "GeocodingScope",
    "GoogleMapsClient",
    "MapboxClient",
    "create_geocoding_client",
    "get_available_providers",
    "get_geocoder",
]
