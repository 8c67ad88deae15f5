"""FastAPI dependency injection for the process-wide lookup service."""

from fastapi import HTTPException, Request, status

from civic_atlas.services.lookup_service import LookupService


def get_lookup_service(request: Request) -> LookupService:
    """Return the LookupService attached to the application at startup.

    Raises:
        HTTPException: 503 if the application state was never initialized.
    """
    service: LookupService | None = getattr(request.app.state, "lookup_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Lookup service is not initialized.",
        )
    return service
