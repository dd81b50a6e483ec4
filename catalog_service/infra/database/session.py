"""Database engine and session management.

The engine is built once per process from ``DatabaseSettings``. Use
``get_async_session()`` in CLI commands and scripts; route handlers receive
sessions through the ``get_db_session`` dependency.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from catalog_service.core.settings import get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

db_settings = get_db_settings()

engine: AsyncEngine = create_async_engine(db_settings.dsn, **db_settings.sqlalchemy_engine_kwargs())

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Example:
        async with get_async_session() as session:
            projects = await ProjectRepository(session).get_by_name("afrika-korps")
    """
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create missing tables, including the SQLite search index."""
    # Import models so they register on the metadata
    from catalog_service.core.database.base import Base
    from catalog_service.features.projects import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(bind: AsyncEngine | None = None) -> None:
    from catalog_service.core.database.base import Base
    from catalog_service.features.projects import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def init_database() -> None:
    """Check connectivity and create tables when configured to.

    Raises:
        SQLAlchemyError: If the database cannot be reached.
    """
    logger.info("Initializing database connection", extra={"backend": db_settings.backend})

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"backend": db_settings.backend, "error": str(e)},
        )
        raise

    if db_settings.create_tables:
        await create_tables()
    logger.info("Database connection established", extra={"backend": db_settings.backend})


async def close_database() -> None:
    """Dispose of the engine's connection pool on shutdown."""
    logger.info("Closing database connection")
    await engine.dispose()
