"""Service layer for the projects feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from catalog_service.core.database import NotFoundError
from catalog_service.core.exceptions import ConflictException
from catalog_service.core.pagination import PaginationMeta, fetch_window
from catalog_service.features.projects.models import Project
from catalog_service.features.projects.repository import (
    ProjectRepository,
    get_project_repository,
)
from catalog_service.features.projects.schemas import ProjectSummary, ProjectsResponse
from catalog_service.features.projects.utils import title_sort_key
from catalog_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from catalog_service.core.pagination import ListingParams
    from catalog_service.features.projects.schemas import ProjectCreate


logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class ProjectService:
    """Service for project catalog operations.

    Handles:
    - Keyset-paginated listings by name, title, time or relevance
    - Lookups by project name
    - Creation with name uniqueness and title sort keys
    """

    def __init__(
        self,
        session: AsyncSession,
        repo: ProjectRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_project_repository()

    async def list_projects(self, params: ListingParams) -> ProjectsResponse:
        """Fetch one page of the project listing.

        Args:
            params: Normalized seek and limit

        Returns:
            The page with prev/next links and the listing total
        """
        storage = self._repo.storage(self._session)
        window = await fetch_window(storage, params.seek, params.limit)
        total = await storage.count(params.seek.sort_by)

        lazy_logger.debug(
            lambda: f"service.list_projects(seek={params.seek.to_canonical_string()!r}, "
            f"limit={params.limit}) -> {len(window.rows)} of {total}"
        )
        return ProjectsResponse(
            projects=[ProjectSummary.from_record(row) for row in window.rows],
            meta=PaginationMeta.from_window(window, total),
        )

    async def get_project(self, name: str) -> Project:
        """Get a project by name.

        Raises:
            NotFoundError: If no project has this name
        """
        project = await self._repo.get_by_name(self._session, name)
        if project is None:
            raise NotFoundError("Project", {"name": name})
        return project

    async def create_project(self, payload: ProjectCreate) -> Project:
        """Create a project.

        Args:
            payload: Project data

        Returns:
            The created project

        Raises:
            ConflictException: If the name is already taken
        """
        if await self._repo.get_by_name(self._session, payload.name) is not None:
            raise ConflictException(
                detail=f"Project {payload.name!r} already exists",
                type="project-exists",
                extra={"name": payload.name},
            )

        game = payload.game
        project = Project(
            name=payload.name,
            description=payload.description,
            revision=1,
            game_title=game.title,
            game_title_sort=game.title_sort_key or title_sort_key(game.title),
            game_publisher=game.publisher,
            game_year=game.year,
        )
        try:
            project = await self._repo.create(self._session, project)
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            # Lost a race with a concurrent insert of the same name
            raise ConflictException(
                detail=f"Project {payload.name!r} already exists",
                type="project-exists",
                extra={"name": payload.name},
            ) from e

        logger.info("Project created", extra={"project_id": project.id, "project": project.name})
        return project
