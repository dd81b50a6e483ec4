"""Repository for the projects feature.

Besides plain lookups the repository is the range storage behind project
listings: one SELECT per page, ordered on ``(sort expression, id)`` and
bounded by a compound seek predicate, so a page costs the same wherever it
sits in the listing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    Float,
    Integer,
    and_,
    column,
    func,
    insert,
    literal,
    literal_column,
    or_,
    select,
    table,
)

from catalog_service.core.pagination import Bound, Comparison, Direction, SortBy, SortField
from catalog_service.features.projects.models import FTS_TABLE, Project
from catalog_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql import ColumnElement

projects_fts = table(
    FTS_TABLE,
    column("rowid", Integer),
    column("name"),
    column("game_title"),
    column("description"),
)


def fts_query(text: str) -> str:
    '''Quote each word of free text as an FTS5 string, ANDed together.

    Example:
        >>> fts_query('afrika "korps')
        '"afrika" """korps"'
    '''
    return " ".join('"' + term.replace('"', '""') + '"' for term in text.split())


@dataclass(frozen=True, slots=True)
class ProjectRow:
    """A project as returned by a range query.

    ``sort_key`` is the value of the sort expression the row was ordered on
    (lowercased name or title, timestamp, or relevance rank).
    """

    id: int
    name: str
    description: str
    revision: int
    game_title: str
    game_title_sort: str
    game_publisher: str
    game_year: str
    created_at: datetime
    modified_at: datetime
    sort_by: SortBy
    sort_key: Any

    @classmethod
    def from_model(cls, project: Project, sort_by: SortBy, sort_key: Any) -> ProjectRow:
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            revision=project.revision,
            game_title=project.game_title,
            game_title_sort=project.game_title_sort,
            game_publisher=project.game_publisher,
            game_year=project.game_year,
            created_at=project.created_at,
            modified_at=project.modified_at,
            sort_by=sort_by,
            sort_key=sort_key,
        )

    @property
    def tiebreak_id(self) -> int:
        return self.id

    def seek_key(self, sort_by: SortBy) -> str | float:
        if sort_by != self.sort_by:
            msg = f"row was fetched sorted by {self.sort_by}, not {sort_by}"
            raise ValueError(msg)
        if sort_by.is_relevance:
            return float(self.sort_key)
        if isinstance(self.sort_key, datetime):
            return self.sort_key.isoformat()
        return str(self.sort_key)


def _as_utc(key: str) -> datetime:
    moment = datetime.fromisoformat(key)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class ProjectRepository:
    """Queries over the ``projects`` table.

    Session is always explicit. Use :meth:`storage` to get the range
    storage a listing page is fetched from.
    """

    __slots__ = ("_lazy", "_logger")

    def __init__(self) -> None:
        self._logger = logging.getLogger("repository.Project")
        self._lazy = get_lazy_logger("repository.Project")

    def storage(self, session: AsyncSession) -> ProjectStorage:
        return ProjectStorage(self, session)

    async def get_by_name(self, session: AsyncSession, name: str) -> Project | None:
        result = await session.execute(select(Project).where(Project.name == name))
        project = result.scalar_one_or_none()

        self._lazy.debug(lambda: f"db.get_by_name({name!r}) -> {project is not None}")
        return project

    async def create(self, session: AsyncSession, project: Project) -> Project:
        """Persist a project and index it for search.

        Args:
            session: Database session
            project: Unsaved project

        Returns:
            The project with its id and timestamps populated
        """
        session.add(project)
        await session.flush()
        await session.refresh(project)

        if _is_sqlite(session):
            await session.execute(
                insert(projects_fts).values(
                    rowid=project.id,
                    name=project.name,
                    game_title=project.game_title,
                    description=project.description,
                )
            )

        self._lazy.debug(lambda: f"db.create: Project(id={project.id}, name={project.name!r})")
        return project

    async def range_query(
        self,
        session: AsyncSession,
        sort_by: SortBy,
        direction: Direction,
        bound: Bound | None,
        comparison: Comparison,
        limit: int,
    ) -> list[ProjectRow]:
        """Fetch up to ``limit`` rows ordered on ``(sort expression, id)``.

        Args:
            session: Database session
            sort_by: Sort criterion
            direction: Fetch order
            bound: Boundary row, or None to start at the edge
            comparison: Which side of ``bound`` to return
            limit: Maximum number of rows

        Returns:
            Rows in fetch order
        """
        sqlite = _is_sqlite(session)
        expr = _sort_expression(sort_by, sqlite=sqlite)
        stmt = select(Project, expr.label("sort_key"))
        if sort_by.is_relevance:
            stmt = _match(stmt, sort_by.query or "", sqlite=sqlite)

        if bound is not None and comparison is not Comparison.NONE:
            stmt = stmt.where(_seek_predicate(sort_by, expr, bound, comparison))

        if direction is Direction.ASCENDING:
            stmt = stmt.order_by(expr.asc(), Project.id.asc())
        else:
            stmt = stmt.order_by(expr.desc(), Project.id.desc())
        stmt = stmt.limit(limit)

        result = await session.execute(stmt)
        rows = [ProjectRow.from_model(project, sort_by, key) for project, key in result.all()]

        self._lazy.debug(
            lambda: f"db.range_query(sort={sort_by}, dir={direction.tag}, bound={bound}, "
            f"comparison={comparison.value}, limit={limit}) -> {len(rows)} rows"
        )
        return rows

    async def count(self, session: AsyncSession, sort_by: SortBy) -> int:
        """Count projects in a listing; relevance listings count matches only."""
        stmt = select(func.count()).select_from(Project)
        if sort_by.is_relevance:
            stmt = _match(stmt, sort_by.query or "", sqlite=_is_sqlite(session))
        total = (await session.execute(stmt)).scalar_one()

        self._lazy.debug(lambda: f"db.count(sort={sort_by}) -> {total}")
        return total


@dataclass(frozen=True, slots=True)
class ProjectStorage:
    """Range storage over projects, bound to one session."""

    repository: ProjectRepository
    session: AsyncSession

    async def range_query(
        self,
        sort_by: SortBy,
        direction: Direction,
        bound: Bound | None,
        comparison: Comparison,
        limit: int,
    ) -> Sequence[ProjectRow]:
        return await self.repository.range_query(
            self.session, sort_by, direction, bound, comparison, limit
        )

    async def count(self, sort_by: SortBy) -> int:
        return await self.repository.count(self.session, sort_by)


def _is_sqlite(session: AsyncSession) -> bool:
    return session.get_bind().dialect.name == "sqlite"


def _search_vector() -> ColumnElement[Any]:
    return func.to_tsvector(
        "simple",
        func.concat_ws(" ", Project.name, Project.game_title, Project.description),
    )


def _sort_expression(sort_by: SortBy, *, sqlite: bool) -> ColumnElement[Any]:
    match sort_by.field:
        case SortField.PROJECT_NAME:
            return func.lower(Project.name)
        case SortField.DISPLAY_TITLE:
            return func.lower(Project.game_title_sort)
        case SortField.MODIFICATION_TIME:
            return Project.modified_at
        case SortField.CREATION_TIME:
            return Project.created_at
        case SortField.RELEVANCE:
            if sqlite:
                # bm25 is smaller for better matches
                return -func.bm25(literal_column(FTS_TABLE), type_=Float)
            return func.ts_rank(
                _search_vector(), func.plainto_tsquery("simple", sort_by.query), type_=Float
            )
    msg = f"unsupported sort field: {sort_by.field!r}"
    raise ValueError(msg)


def _match(stmt: Any, query: str, *, sqlite: bool) -> Any:
    if sqlite:
        return stmt.join(projects_fts, projects_fts.c.rowid == Project.id).where(
            literal_column(FTS_TABLE).op("MATCH")(fts_query(query))
        )
    return stmt.where(_search_vector().op("@@")(func.plainto_tsquery("simple", query)))


def _seek_predicate(
    sort_by: SortBy,
    expr: ColumnElement[Any],
    bound: Bound,
    comparison: Comparison,
) -> ColumnElement[bool]:
    value: Any
    if sort_by.is_relevance:
        value = literal(float(bound.value), Float)
    elif sort_by.is_temporal:
        value = _as_utc(str(bound.value))
    else:
        value = func.lower(literal(str(bound.value)))

    if comparison is Comparison.GREATER:
        return or_(expr > value, and_(expr == value, Project.id > bound.tiebreak_id))
    return or_(expr < value, and_(expr == value, Project.id < bound.tiebreak_id))


_project_repository = ProjectRepository()


def get_project_repository() -> ProjectRepository:
    """Get the shared, stateless ProjectRepository."""
    return _project_repository
