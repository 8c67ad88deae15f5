"""Lookup API endpoints: address/point lookup, autocomplete, and reverse geocoding."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger

from civic_atlas.core.dependencies import get_lookup_service
from civic_atlas.lib.geocoder import AddressNotFoundError, GeocodingProviderError
from civic_atlas.schemas.lookup import AutocompleteResponse, LookupResponse, ReverseResponse
from civic_atlas.services.lookup_service import LookupService

lookup_router = APIRouter(tags=["lookup"])


@lookup_router.get(
    "/lookup",
    response_model=LookupResponse,
)
async def lookup(
    address: str | None = Query(  # noqa: B008
        default=None,
        max_length=500,
        description="Free-text street address to geocode",
    ),
    lat: str | None = Query(default=None, description="Latitude (used when no address is given)"),  # noqa: B008
    lng: str | None = Query(default=None, description="Longitude (used when no address is given)"),  # noqa: B008
    service: LookupService = Depends(get_lookup_service),  # noqa: B008
) -> LookupResponse:
    """Resolve districts and matched officials or endorsements for a location."""
    try:
        return await service.lookup(address=address, lat=lat, lng=lng)
    except AddressNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except GeocodingProviderError as e:
        logger.warning(f"Lookup geocoding failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message,
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e


@lookup_router.get(
    "/autocomplete",
    response_model=AutocompleteResponse,
)
async def autocomplete(
    q: str | None = Query(default=None, max_length=200, description="Partial address"),  # noqa: B008
    service: LookupService = Depends(get_lookup_service),  # noqa: B008
) -> AutocompleteResponse:
    """Suggest addresses inside the jurisdiction. Short queries return no suggestions."""
    try:
        suggestions = await service.autocomplete(q)
    except GeocodingProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message,
        ) from e
    return AutocompleteResponse(suggestions=suggestions)


@lookup_router.get(
    "/reverse",
    response_model=ReverseResponse,
)
async def reverse(
    lat: str | None = Query(default=None, description="Latitude"),  # noqa: B008
    lng: str | None = Query(default=None, description="Longitude"),  # noqa: B008
    service: LookupService = Depends(get_lookup_service),  # noqa: B008
) -> ReverseResponse:
    """Return the address nearest to a point."""
    try:
        address = await service.reverse(lat, lng)
    except GeocodingProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message,
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    return ReverseResponse(address=address)
