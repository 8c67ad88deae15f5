"""Lookup CLI commands: one-off lookups, autocomplete, and layer inspection."""

import asyncio
import json

import typer

from civic_atlas.core.config import get_settings
from civic_atlas.lib.geocoder import AddressNotFoundError, GeocodingProviderError
from civic_atlas.services.lookup_service import LookupService


def _service() -> LookupService:
    from civic_atlas.main import build_lookup_service

    return build_lookup_service(get_settings())


def lookup(
    address: str | None = typer.Option(None, "--address", help="Street address to geocode"),
    lat: float | None = typer.Option(None, "--lat", help="Latitude (-90 to 90)"),  # noqa: B008
    lng: float | None = typer.Option(None, "--lng", help="Longitude (-180 to 180)"),  # noqa: B008
) -> None:
    """Resolve districts and matched officials/endorsements, printed as JSON."""
    service = _service()
    try:
        result = asyncio.run(service.lookup(address=address, lat=lat, lng=lng))
    except (AddressNotFoundError, GeocodingProviderError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(result.model_dump_json(indent=2, exclude_none=True))


def autocomplete(
    query: str = typer.Argument(..., help="Partial address (at least 3 characters)"),  # noqa: B008
) -> None:
    """Print address suggestions inside the jurisdiction."""
    service = _service()
    try:
        suggestions = asyncio.run(service.autocomplete(query))
    except GeocodingProviderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    if not suggestions:
        typer.echo("No suggestions.")
        return
    for suggestion in suggestions:
        typer.echo(f"{suggestion.address}  ({suggestion.lat:.6f}, {suggestion.lng:.6f})")


def layers(
    as_json: bool = typer.Option(False, "--json", help="Print as JSON"),  # noqa: FBT001
) -> None:
    """List configured district layers with loaded feature counts."""
    data = _service().data

    rows = [
        {
            "layer": layer_id,
            "label": layer.config.label,
            "path": layer.config.path,
            "features": len(layer),
        }
        for layer_id, layer in data.layers.items()
    ]

    if as_json:
        typer.echo(json.dumps(rows, indent=2))
        return

    typer.echo(f"Jurisdiction: {data.jurisdiction.name}")
    for row in rows:
        typer.echo(f"  {row['layer']:<16} {row['features']:>5} districts  {row['label']} ({row['path']})")
