"""API router for the projects feature.

Endpoints:
    GET  /projects         - One page of the project listing
    GET  /projects/{name}  - A single project
    POST /projects         - Create a project

Listing parameters:
    sort   p (name), t (title), m (modified), c (created)
    order  a or d; defaults per sort
    q      free-text query; lists matches by relevance
    from   start at the first row whose sort value reaches this value
    limit  page size, 1-100
    seek   token from a previous page's ``prev_page``/``next_page`` link;
           cannot be combined with the parameters above except ``limit``

Example Usage:
    GET /projects?sort=t&limit=5
    GET /projects?seek=cCxhLGEsZSwsNQ&limit=5
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from catalog_service.core.dependencies import DbSession, ListingParamsDep
from catalog_service.core.schemas import ProblemDetail
from catalog_service.features.projects.schemas import (
    ProjectCreate,
    ProjectSummary,
    ProjectsResponse,
)
from catalog_service.features.projects.service import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])
logger = logging.getLogger(__name__)

_PROBLEM_RESPONSES: dict[int | str, dict[str, object]] = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ProblemDetail,
        "description": "Malformed query or limit out of range",
    },
}


@router.get(
    "",
    response_model=ProjectsResponse,
    summary="List projects",
    description="Return one page of projects with links to the neighbouring pages.",
    responses=_PROBLEM_RESPONSES,
)
async def list_projects(session: DbSession, params: ListingParamsDep) -> ProjectsResponse:
    return await ProjectService(session).list_projects(params)


@router.get(
    "/{name}",
    response_model=ProjectSummary,
    summary="Get a project",
    responses={status.HTTP_404_NOT_FOUND: {"model": ProblemDetail}},
)
async def get_project(name: str, session: DbSession) -> ProjectSummary:
    project = await ProjectService(session).get_project(name)
    return ProjectSummary.from_record(project)


@router.post(
    "",
    response_model=ProjectSummary,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    responses={status.HTTP_409_CONFLICT: {"model": ProblemDetail}},
)
async def create_project(payload: ProjectCreate, session: DbSession) -> ProjectSummary:
    """Create a project.

    The game title sort key is derived from the title when not supplied.
    """
    project = await ProjectService(session).create_project(payload)
    return ProjectSummary.from_record(project)
