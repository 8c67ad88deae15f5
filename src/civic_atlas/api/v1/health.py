"""Health check endpoint."""

from fastapi import APIRouter

from civic_atlas.schemas.lookup import HealthResponse

health_router = APIRouter(tags=["health"])


@health_router.get("/health", status_code=200, response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(status="healthy")
