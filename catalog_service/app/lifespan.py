"""Application lifespan management.

Startup order: logging, then the database. Shutdown runs in reverse.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from catalog_service.core.settings import get_app_settings, get_logging_settings
from catalog_service.infra.database import close_database, init_database
from catalog_service.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop application services."""
    settings = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={
            "service": settings.service_name,
            "version": settings.version,
            "environment": settings.environment,
        },
    )

    await init_database()
    try:
        yield
    finally:
        logger.info("Application shutting down", extra={"service": settings.service_name})
        await close_database()
