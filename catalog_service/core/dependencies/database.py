"""Database dependencies for FastAPI route handlers.

Route handlers take sessions from ``get_db_session``; CLI commands and
scripts use ``catalog_service.infra.database.get_async_session`` directly.
Both draw from the same session factory. Tests swap the dependency through
``app.dependency_overrides``.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is closed after the request.
    """
    async with get_async_session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
