"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from civic_atlas.core.config import Settings, get_settings
from civic_atlas.core.logging import setup_logging
from civic_atlas.lib.geocoder import GeocodingClientCache
from civic_atlas.services.jurisdiction_data import lazy_jurisdiction_data
from civic_atlas.services.lookup_service import LookupService


def build_lookup_service(settings: Settings) -> LookupService:
    """Wire a LookupService with lazily loaded data and a fresh client cache."""
    return LookupService(settings, lazy_jurisdiction_data(settings), GeocodingClientCache())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: configure logging and load jurisdiction data on startup."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_dir, json_logs=settings.log_json)
    logger.info(f"Serving lookups under {settings.api_prefix} (roster mode: {settings.roster_mode})")
    await app.state.lookup_service.warm_up()

    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; read from the environment when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Civic Atlas",
        description="Jurisdiction lookup: districts, elected officials, and endorsements for an address",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.lookup_service = build_lookup_service(settings)

    # Register exception handlers
    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    # Register middleware and routers
    from civic_atlas.api.router import create_router, setup_cors

    setup_cors(app, settings)
    app.include_router(create_router(settings))

    return app
