"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_service.core.settings import get_app_settings
from catalog_service.features.projects.router import router as projects_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from catalog_service.core.settings import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register feature routers under the API prefix."""
    settings = app_settings or get_app_settings()
    app.include_router(projects_router, prefix=settings.api_prefix)
    logger.debug("Routers registered", extra={"api_prefix": settings.api_prefix})
