"""Server management commands."""

import click
import uvicorn

from catalog_service.cli.utils import info
from catalog_service.core.settings import get_app_settings


@click.group(name="server")
def server() -> None:
    """Server management commands."""


@server.command()
@click.option("--host", default=None, help="Host to bind (default: from settings)")
@click.option("--port", default=None, type=int, help="Port to bind (default: from settings)")
@click.option("--reload/--no-reload", default=False, help="Enable auto-reload on code changes")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug"]),
    help="Uvicorn log level",
)
def run(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Run the HTTP API."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Serving {settings.service_name} at http://{host}:{port}{settings.api_prefix}")
    uvicorn.run(
        "catalog_service.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
