"""Entry point for catalog-service.

``catalog-service --server`` serves the HTTP API; any other invocation runs
the management CLI.
"""

from __future__ import annotations

import sys
from typing import NoReturn


def run_fastapi_server() -> NoReturn:
    """Serve the FastAPI application with uvicorn using configured host/port."""
    import uvicorn

    from catalog_service.core.settings import get_app_settings, get_logging_settings

    settings = get_app_settings()
    log_settings = get_logging_settings()

    uvicorn.run(
        "catalog_service.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=log_settings.level.lower(),
    )
    sys.exit(0)


def run_cli() -> NoReturn:
    from catalog_service.cli.main import main as cli_main

    cli_main()
    sys.exit(0)


def main() -> NoReturn:
    if "--server" in sys.argv:
        sys.argv.remove("--server")
        run_fastapi_server()
    run_cli()


if __name__ == "__main__":
    main()
