"""Root API router and middleware registration."""

from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from civic_atlas.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from civic_atlas.api.v1.health import health_router
    from civic_atlas.api.v1.lookup import lookup_router

    root_router = APIRouter(prefix=settings.api_prefix)
    root_router.include_router(lookup_router)
    root_router.include_router(health_router)

    return root_router


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware when origins are configured.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    if not settings.cors_origin_list:
        return
    kwargs: dict[str, Any] = {
        "allow_origins": settings.cors_origin_list,
        "allow_methods": ["GET"],
        "allow_headers": ["*"],
    }
    app.add_middleware(CORSMiddleware, **kwargs)
