"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from catalog_service.app.exception_handlers import configure_exception_handlers
from catalog_service.app.lifespan import lifespan
from catalog_service.app.middleware import configure_middleware
from catalog_service.app.router import setup_routers
from catalog_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_app_settings()

    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version=settings.version,
        docs_url=settings.get_docs_url(),
        redoc_url=settings.get_redoc_url(),
        openapi_url=settings.get_openapi_url(),
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Exception handlers before middleware
    configure_exception_handlers(app)
    configure_middleware(app)
    setup_routers(app, settings)

    return app


# Application instance for uvicorn
app = create_app()
