"""Integration tests for the lookup, autocomplete, reverse, and health endpoints."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from civic_atlas.core.config import Settings
from civic_atlas.core.logging import setup_logging
from civic_atlas.lib.geocoder import (
    AddressNotFoundError,
    AutocompleteSuggestion,
    GeocodeResult,
    GeocodingProviderError,
)
from civic_atlas.main import create_app
from civic_atlas.services.lookup_service import LookupService


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create the full application against the sample data directory."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> AsyncClient:
    """Create an async test client."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test", follow_redirects=False)


@pytest.fixture
def geocoder() -> Iterator[MagicMock]:
    """A stand-in geocoding client returned by LookupService.geocoder()."""
    mock = MagicMock()
    mock.geocode_address = AsyncMock()
    mock.autocomplete_address = AsyncMock(return_value=[])
    mock.reverse_geocode = AsyncMock(return_value=None)
    with patch.object(LookupService, "geocoder", return_value=mock):
        yield mock


class TestLifespan:
    """Tests for application startup."""

    async def test_startup_loads_jurisdiction_data(self, app: FastAPI) -> None:
        assert app.state.lookup_service.is_loaded is False
        try:
            async with app.router.lifespan_context(app):
                assert app.state.lookup_service.is_loaded is True
        finally:
            setup_logging("INFO")


class TestHealthEndpoint:
    """Tests for GET /api/health."""

    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}


class TestLookupEndpoint:
    """Tests for GET /api/lookup."""

    async def test_point_lookup_returns_200(self, client: AsyncClient) -> None:
        """Coordinates resolve districts and one row per office slot."""
        resp = await client.get("/api/lookup", params={"lat": "41.88", "lng": "-87.63"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["address_used"] is None
        assert data["coordinates"] == {"lat": 41.88, "lng": -87.63}
        assert data["districts"]["congressional"] == 7
        assert data["districts"]["city_ward"] == 42
        assert len(data["officials"]) == 7
        assert data["officials"][2]["name"] == "Representative Seven"
        assert data["officials"][2]["district"] == {"layer": "congressional", "number": 7}
        assert data["officials"][2]["status"] == "matched"
        assert data["endorsements"] is None

    async def test_address_lookup(self, client: AsyncClient, geocoder: MagicMock) -> None:
        geocoder.geocode_address.return_value = GeocodeResult(
            lat=41.88, lng=-87.63, matched_address="121 N LaSalle St, Chicago, IL"
        )
        resp = await client.get("/api/lookup", params={"address": "121 N LaSalle St"})

        assert resp.status_code == 200
        assert resp.json()["address_used"] == "121 N LaSalle St, Chicago, IL"
        geocoder.geocode_address.assert_awaited_once_with("121 N LaSalle St")

    async def test_missing_input_returns_400(self, client: AsyncClient) -> None:
        resp = await client.get("/api/lookup")
        assert resp.status_code == 400
        assert "must be provided" in resp.json()["detail"]

    async def test_outside_jurisdiction_returns_400(self, client: AsyncClient) -> None:
        resp = await client.get("/api/lookup", params={"lat": "40.71", "lng": "-74.0"})
        assert resp.status_code == 400
        assert "outside" in resp.json()["detail"]

    async def test_invalid_coordinates_returns_400(self, client: AsyncClient) -> None:
        resp = await client.get("/api/lookup", params={"lat": "north", "lng": "-87.63"})
        assert resp.status_code == 400

    async def test_address_not_found_returns_400(self, client: AsyncClient, geocoder: MagicMock) -> None:
        geocoder.geocode_address.side_effect = AddressNotFoundError("Nowhere")
        resp = await client.get("/api/lookup", params={"address": "Nowhere"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Address not found"

    async def test_provider_error_returns_502(self, client: AsyncClient, geocoder: MagicMock) -> None:
        geocoder.geocode_address.side_effect = GeocodingProviderError("mapbox", "Request timed out")
        resp = await client.get("/api/lookup", params={"address": "121 N LaSalle St"})
        assert resp.status_code == 502
        assert resp.json()["detail"] == "Request timed out"

    async def test_missing_provider_key_returns_502(self, settings: Settings) -> None:
        app = create_app(settings.model_copy(update={"geocoding_provider": "geoapify", "geoapify_api_key": None}))
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        resp = await client.get("/api/lookup", params={"address": "121 N LaSalle St"})
        assert resp.status_code == 502
        assert "GEOAPIFY_API_KEY" in resp.json()["detail"]

    async def test_endorsements_mode(self, settings: Settings) -> None:
        app = create_app(settings.model_copy(update={"roster_mode": "endorsements"}))
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        resp = await client.get("/api/lookup", params={"lat": "41.88", "lng": "-87.63"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["officials"] is None
        assert [e["candidate"] for e in data["endorsements"]] == ["Statewide Candidate", "District Candidate"]


class TestAutocompleteEndpoint:
    """Tests for GET /api/autocomplete."""

    async def test_short_query_returns_empty(self, client: AsyncClient, geocoder: MagicMock) -> None:
        resp = await client.get("/api/autocomplete", params={"q": "ab"})
        assert resp.status_code == 200
        assert resp.json() == {"suggestions": []}
        geocoder.autocomplete_address.assert_not_awaited()

    async def test_suggestions(self, client: AsyncClient, geocoder: MagicMock) -> None:
        geocoder.autocomplete_address.return_value = [
            AutocompleteSuggestion(address="121 N LaSalle St, Chicago", lat=41.88, lng=-87.63)
        ]
        resp = await client.get("/api/autocomplete", params={"q": "121 N La"})

        assert resp.status_code == 200
        assert resp.json()["suggestions"] == [{"address": "121 N LaSalle St, Chicago", "lat": 41.88, "lng": -87.63}]

    async def test_provider_error_returns_502(self, client: AsyncClient, geocoder: MagicMock) -> None:
        geocoder.autocomplete_address.side_effect = GeocodingProviderError("geocode-earth", "HTTP 500")
        resp = await client.get("/api/autocomplete", params={"q": "121 N La"})
        assert resp.status_code == 502


class TestReverseEndpoint:
    """Tests for GET /api/reverse."""

    async def test_reverse(self, client: AsyncClient, geocoder: MagicMock) -> None:
        geocoder.reverse_geocode.return_value = "121 N LaSalle St, Chicago"
        resp = await client.get("/api/reverse", params={"lat": "41.88", "lng": "-87.63"})

        assert resp.status_code == 200
        assert resp.json() == {"address": "121 N LaSalle St, Chicago"}
        geocoder.reverse_geocode.assert_awaited_once_with(41.88, -87.63)

    async def test_no_result(self, client: AsyncClient, geocoder: MagicMock) -> None:
        resp = await client.get("/api/reverse", params={"lat": "41.88", "lng": "-87.63"})
        assert resp.json() == {"address": None}

    async def test_invalid_coordinates_returns_400(self, client: AsyncClient, geocoder: MagicMock) -> None:
        resp = await client.get("/api/reverse", params={"lat": "41.88"})
        assert resp.status_code == 400
        geocoder.reverse_geocode.assert_not_awaited()


class TestCors:
    """Tests for CORS registration."""

    async def test_allowed_origin(self, settings: Settings) -> None:
        app = create_app(settings.model_copy(update={"cors_origins": "https://guide.example.org"}))
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        resp = await client.get("/api/health", headers={"Origin": "https://guide.example.org"})
        assert resp.headers["access-control-allow-origin"] == "https://guide.example.org"
