"""Sort criteria for project listings.

Every criterion has a one character wire tag. Relevance additionally carries
the free-text query, so its tag is ``q`` followed by the query text.

    ==========  ==================  =================
    tag         criterion           default direction
    ==========  ==================  =================
    ``p``       project name        ascending
    ``t``       display title       ascending
    ``m``       modification time   descending
    ``c``       creation time       descending
    ``q<text>`` relevance           descending
    ==========  ==================  =================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from catalog_service.core.exceptions import MalformedQueryException


class Direction(StrEnum):
    """Ordering direction, tagged ``a`` or ``d`` on the wire."""

    ASCENDING = "a"
    DESCENDING = "d"

    def rev(self) -> Direction:
        """Return the opposite direction."""
        if self is Direction.ASCENDING:
            return Direction.DESCENDING
        return Direction.ASCENDING

    @property
    def tag(self) -> str:
        return self.value

    @classmethod
    def from_tag(cls, tag: str) -> Direction:
        try:
            return cls(tag)
        except ValueError:
            raise MalformedQueryException(
                detail=f"unknown order {tag!r}, expected 'a' or 'd'",
                extra={"parameter": "order"},
            ) from None


class SortField(StrEnum):
    """Field a listing is ordered on."""

    PROJECT_NAME = "p"
    DISPLAY_TITLE = "t"
    MODIFICATION_TIME = "m"
    CREATION_TIME = "c"
    RELEVANCE = "q"


_DEFAULT_DIRECTIONS: dict[SortField, Direction] = {
    SortField.PROJECT_NAME: Direction.ASCENDING,
    SortField.DISPLAY_TITLE: Direction.ASCENDING,
    SortField.MODIFICATION_TIME: Direction.DESCENDING,
    SortField.CREATION_TIME: Direction.DESCENDING,
    SortField.RELEVANCE: Direction.DESCENDING,
}


@dataclass(frozen=True, slots=True)
class SortBy:
    """A sort criterion.

    ``query`` is required for ``SortField.RELEVANCE`` and forbidden for every
    other field.

    Example:
        >>> SortBy(SortField.PROJECT_NAME).tag
        'p'
        >>> SortBy.relevance("afrika korps").tag
        'qafrika korps'
    """

    field: SortField
    query: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.field, SortField):
            raise MalformedQueryException(detail=f"unknown sort field {self.field!r}")
        if self.field is SortField.RELEVANCE:
            if self.query is None or not self.query.strip():
                raise MalformedQueryException(
                    detail="relevance sort requires a non-empty query",
                    extra={"parameter": "q"},
                )
        elif self.query is not None:
            raise MalformedQueryException(
                detail=f"sort {self.field.value!r} does not take a query",
            )

    @classmethod
    def relevance(cls, query: str) -> SortBy:
        return cls(SortField.RELEVANCE, query)

    @property
    def is_relevance(self) -> bool:
        return self.field is SortField.RELEVANCE

    @property
    def is_temporal(self) -> bool:
        return self.field in (SortField.MODIFICATION_TIME, SortField.CREATION_TIME)

    def default_direction(self) -> Direction:
        return _DEFAULT_DIRECTIONS[self.field]

    @property
    def tag(self) -> str:
        if self.is_relevance:
            return f"{SortField.RELEVANCE.value}{self.query}"
        return self.field.value

    @classmethod
    def from_tag(cls, tag: str) -> SortBy:
        """Parse a sort tag.

        Raises:
            MalformedQueryException: If the tag is unknown, or is a bare ``q``.
        """
        if tag.startswith(SortField.RELEVANCE.value):
            return cls.relevance(tag[1:])
        try:
            field = SortField(tag)
        except ValueError:
            raise MalformedQueryException(
                detail=f"unknown sort {tag!r}",
                extra={"parameter": "sort"},
            ) from None
        return cls(field)

    def __str__(self) -> str:
        return self.tag
