"""Typer CLI root: ``serve`` plus the lookup, autocomplete, and layers commands."""

import typer

from civic_atlas.core.config import get_settings
from civic_atlas.core.logging import setup_logging

app = typer.Typer(name="civic-atlas", help="Jurisdiction lookup CLI: districts, officials, and endorsements")


@app.callback()
def _main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG regardless of LOG_LEVEL"),  # noqa: FBT001
) -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(
        "DEBUG" if verbose else settings.log_level,
        log_dir=settings.log_dir,
        json_logs=settings.log_json,
    )


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("127.0.0.1", "--host", help="Bind host"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the lookup API server."""
    import uvicorn

    settings = get_settings()
    typer.echo(f"Serving {settings.api_prefix}/lookup on http://{host}:{port} (provider: {settings.geocoding_provider})")
    uvicorn.run(
        "civic_atlas.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def _register_subcommands() -> None:
    """Attach the lookup commands to the root app."""
    from civic_atlas.cli.lookup_cmd import autocomplete, layers, lookup

    app.command("lookup")(lookup)
    app.command("autocomplete")(autocomplete)
    app.command("layers")(layers)


_register_subcommands()
