"""Pytest configuration and shared fixtures.

Organization:
    - Application Fixtures: FastAPI app and HTTP client
    - Database Fixtures: in-memory SQLite engine, session and project data
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from catalog_service.features.projects.models import Project

# Keep the module-level engine off disk
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")

BASE_TIME = datetime(2023, 11, 12, 15, 50, 6, tzinfo=UTC)

# Ten projects a..j: ids 1..10 in insertion order.
TEN_PROJECTS: list[tuple[str, str]] = [
    ("a", "Afrika Korps"),
    ("b", "The Battle of the Bulge"),
    ("c", "Combat Commander"),
    ("d", "D-Day"),
    ("e", "An Empire in Arms"),
    ("f", "Flat Top"),
    ("g", "Gettysburg"),
    ("h", "A House Divided"),
    ("i", "Imperium Romanum"),
    ("j", "Jutland"),
]


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async engine over a private in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session over freshly created tables, including the search index."""
    from catalog_service.infra.database import create_tables, drop_tables

    await create_tables(db_engine)
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()
    await drop_tables(db_engine)


@pytest.fixture
def add_project(db_session: AsyncSession) -> Callable[..., Awaitable[Project]]:
    """Factory inserting a project with explicit timestamps.

    Example:
        async def test_lookup(add_project):
            await add_project("afrika-korps", "Afrika Korps")
    """
    from catalog_service.features.projects.models import Project
    from catalog_service.features.projects.repository import get_project_repository
    from catalog_service.features.projects.utils import title_sort_key

    repo = get_project_repository()

    async def _add(
        name: str,
        title: str,
        *,
        description: str = "",
        created_at: datetime | None = None,
        modified_at: datetime | None = None,
    ) -> Project:
        created = created_at or BASE_TIME
        project = Project(
            name=name,
            description=description,
            revision=1,
            game_title=title,
            game_title_sort=title_sort_key(title),
            game_publisher="",
            game_year="",
            created_at=created,
            modified_at=modified_at or created,
        )
        project = await repo.create(db_session, project)
        await db_session.commit()
        return project

    return _add


@pytest.fixture
async def ten_projects(add_project: Callable[..., Awaitable[Project]]) -> list[Project]:
    """Projects a..j (ids 1..10), created and modified one hour apart."""
    projects = []
    for offset, (name, title) in enumerate(TEN_PROJECTS):
        stamp = BASE_TIME + timedelta(hours=offset)
        projects.append(await add_project(name, title, created_at=stamp, modified_at=stamp))
    return projects


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(db_session: AsyncSession) -> FastAPI:
    """FastAPI application whose requests share the test session."""
    from catalog_service.app.main import create_app
    from catalog_service.core.dependencies import get_db_session

    application = create_app()

    async def _session_override() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db_session] = _session_override
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the test application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
