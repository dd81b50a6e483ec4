"""SQLAlchemy models for the projects feature."""

from __future__ import annotations

from sqlalchemy import DDL, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column

from catalog_service.core.database import Base, IntegerPKMixin, TimestampMixin

FTS_TABLE = "projects_fts"


class Project(IntegerPKMixin, TimestampMixin, Base):
    """A game module project in the catalog.

    ``game_title_sort`` is the title with any leading article moved to the
    end ("Longest Day, The") and is what title listings order on.
    """

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        comment="Unique project slug",
    )
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    revision: Mapped[int] = mapped_column(default=1, nullable=False)
    game_title: Mapped[str] = mapped_column(String(255), nullable=False)
    game_title_sort: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Title with leading article moved to the end",
    )
    game_publisher: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    game_year: Mapped[str] = mapped_column(String(32), default="", nullable=False)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name!r})>"


# SQLite full-text index over the searchable columns, rowid = projects.id.
event.listen(
    Project.__table__,
    "after_create",
    DDL(
        f"CREATE VIRTUAL TABLE IF NOT EXISTS {FTS_TABLE} "
        "USING fts5(name, game_title, description)"
    ).execute_if(dialect="sqlite"),
)
event.listen(
    Project.__table__,
    "before_drop",
    DDL(f"DROP TABLE IF EXISTS {FTS_TABLE}").execute_if(dialect="sqlite"),
)
