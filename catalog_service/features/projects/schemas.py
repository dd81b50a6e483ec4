"""Pydantic schemas for the projects feature."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog_service.core.pagination import PaginationMeta

if TYPE_CHECKING:
    from catalog_service.features.projects.models import Project
    from catalog_service.features.projects.repository import ProjectRow

NAME_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_-]*$"


class GameInfo(BaseModel):
    """The game a project is a module for."""

    title: str
    title_sort_key: str
    publisher: str = ""
    year: str = ""


class GameInfoCreate(BaseModel):
    """Game data supplied when creating a project.

    ``title_sort_key`` is derived from ``title`` when omitted.
    """

    title: str = Field(..., min_length=1, max_length=255)
    title_sort_key: str | None = Field(default=None, min_length=1, max_length=255)
    publisher: str = Field(default="", max_length=255)
    year: str = Field(default="", max_length=32)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "title must not be blank"
            raise ValueError(msg)
        return v


class ProjectCreate(BaseModel):
    """Payload used when creating a project."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=NAME_PATTERN,
        description="Unique project slug (e.g., 'afrika-korps')",
    )
    description: str = Field(default="", max_length=10_000)
    game: GameInfoCreate


class ProjectSummary(BaseModel):
    """Representation of a project in listings and lookups."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "longest-day",
                "description": "Vassal module",
                "revision": 1,
                "created_at": "2023-11-12T15:50:06.419538+00:00",
                "modified_at": "2023-11-12T15:50:06.419538+00:00",
                "game": {
                    "title": "The Longest Day",
                    "title_sort_key": "Longest Day, The",
                    "publisher": "Avalon Hill",
                    "year": "1980",
                },
            }
        }
    )

    name: str
    description: str
    revision: int
    created_at: datetime
    modified_at: datetime
    game: GameInfo

    @classmethod
    def from_record(cls, record: Project | ProjectRow) -> ProjectSummary:
        return cls(
            name=record.name,
            description=record.description,
            revision=record.revision,
            created_at=record.created_at,
            modified_at=record.modified_at,
            game=GameInfo(
                title=record.game_title,
                title_sort_key=record.game_title_sort,
                publisher=record.game_publisher,
                year=record.game_year,
            ),
        )


class ProjectsResponse(BaseModel):
    """One page of a project listing."""

    projects: list[ProjectSummary]
    meta: PaginationMeta
