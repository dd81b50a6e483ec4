"""Windowing engine for keyset pagination.

Given a :class:`Seek` and a :class:`Limit` the engine plans one directional
range query, asks the storage for ``limit + 1`` rows, and interprets the
result:

- the extra row only signals that another page exists in the walked
  direction and is dropped;
- anchors that walk backward (``End``, ``Before``) fetch in reverse order so
  the rows nearest the boundary survive the LIMIT, and the slice is flipped
  back to display order;
- prev/next links point at the first/last displayed row and always keep the
  current sort and direction.

Storage is abstract: anything implementing :class:`RangeStorage` can back a
listing. Storage errors propagate unchanged, so a failed fetch never produces
a partial page.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from catalog_service.core.pagination.anchor import (
    After,
    AfterRanked,
    Anchor,
    Before,
    BeforeRanked,
    End,
    Start,
)
from catalog_service.core.pagination.limit import Limit
from catalog_service.core.pagination.seek import Seek, SeekLink
from catalog_service.core.pagination.sorting import Direction, SortBy
from catalog_service.infra.logging.lazy import get_lazy_logger

lazy_logger = get_lazy_logger(__name__)


class Comparison(StrEnum):
    """How rows relate to the bound of a range query."""

    NONE = "none"
    GREATER = "greater"
    LESS = "less"


@dataclass(frozen=True, slots=True)
class Bound:
    """Sort value (field value or rank) and id of a boundary row."""

    value: str | float
    tiebreak_id: int


class SeekableRow(Protocol):
    """A row the engine can build anchors from."""

    @property
    def tiebreak_id(self) -> int: ...

    def seek_key(self, sort_by: SortBy) -> str | float: ...


class RangeStorage[RowT: SeekableRow](Protocol):
    """Storage capability consumed by the engine.

    ``range_query`` returns at most ``limit`` rows ordered by
    ``(sort value, id)`` in ``direction``. With a bound, only rows comparing
    strictly greater (or less) than ``(bound.value, bound.tiebreak_id)`` are
    returned.
    """

    async def range_query(
        self,
        sort_by: SortBy,
        direction: Direction,
        bound: Bound | None,
        comparison: Comparison,
        limit: int,
    ) -> Sequence[RowT]: ...

    async def count(self, sort_by: SortBy) -> int: ...


@dataclass(frozen=True, slots=True)
class WindowPlan:
    """Parameters of the single range query serving a seek."""

    order: Direction
    bound: Bound | None
    comparison: Comparison
    backward: bool

    @classmethod
    def for_seek(cls, seek: Seek) -> WindowPlan:
        match seek.anchor:
            case Start():
                return cls(seek.direction, None, Comparison.NONE, backward=False)
            case End():
                return cls(seek.direction.rev(), None, Comparison.NONE, backward=True)
            case After(key=value, tiebreak_id=tiebreak_id) | AfterRanked(
                rank=value, tiebreak_id=tiebreak_id
            ):
                return cls.bounded(seek.direction, Bound(value, tiebreak_id), backward=False)
            case Before(key=value, tiebreak_id=tiebreak_id) | BeforeRanked(
                rank=value, tiebreak_id=tiebreak_id
            ):
                return cls.bounded(seek.direction.rev(), Bound(value, tiebreak_id), backward=True)
        raise TypeError(f"not an anchor: {seek.anchor!r}")

    @classmethod
    def bounded(cls, order: Direction, bound: Bound, *, backward: bool) -> WindowPlan:
        # Rows ahead of the bound in fetch order.
        comparison = Comparison.GREATER if order is Direction.ASCENDING else Comparison.LESS
        return cls(order, bound, comparison, backward=backward)


@dataclass(frozen=True, slots=True)
class Window[RowT]:
    """One page of rows in display order plus links to its neighbours."""

    rows: list[RowT]
    prev_page: SeekLink | None = None
    next_page: SeekLink | None = None


def _after(sort_by: SortBy, row: SeekableRow) -> Anchor:
    key = row.seek_key(sort_by)
    if sort_by.is_relevance:
        return AfterRanked(float(key), row.tiebreak_id)
    return After(str(key), row.tiebreak_id)


def _before(sort_by: SortBy, row: SeekableRow) -> Anchor:
    key = row.seek_key(sort_by)
    if sort_by.is_relevance:
        return BeforeRanked(float(key), row.tiebreak_id)
    return Before(str(key), row.tiebreak_id)


def neighbour_anchors(
    seek: Seek, rows: Sequence[SeekableRow], more: bool
) -> tuple[Anchor | None, Anchor | None]:
    """Anchors of the previous and next page.

    Args:
        seek: Seek that produced ``rows``.
        rows: Page rows in display order.
        more: Whether the fetch returned an extra row, i.e. more rows exist
            beyond the page in the walked direction.

    Returns:
        ``(prev, next)`` anchors, ``None`` where no such page exists.
    """
    sort_by = seek.sort_by
    match seek.anchor:
        case Start():
            return None, (_after(sort_by, rows[-1]) if more else None)
        case End():
            return (_before(sort_by, rows[0]) if more else None), None
        case After() | AfterRanked():
            if not rows:
                # Walked past the last row. Relevance listings have no End.
                return (None if sort_by.is_relevance else End()), None
            return _before(sort_by, rows[0]), (_after(sort_by, rows[-1]) if more else None)
        case Before() | BeforeRanked():
            if not rows:
                return None, Start()
            return (_before(sort_by, rows[0]) if more else None), _after(sort_by, rows[-1])
    raise TypeError(f"not an anchor: {seek.anchor!r}")


async def fetch_window[RowT: SeekableRow](
    storage: RangeStorage[RowT], seek: Seek, limit: Limit
) -> Window[RowT]:
    """Fetch the page ``seek`` points at.

    Args:
        storage: Range query capability.
        seek: Validated seek.
        limit: Page size.

    Returns:
        Rows in display order with prev/next links.
    """
    plan = WindowPlan.for_seek(seek)
    lazy_logger.debug(
        lambda: f"Fetching window seek={seek.to_canonical_string()!r} limit={limit.value} "
        f"order={plan.order.name} comparison={plan.comparison.value}"
    )

    fetched = list(
        await storage.range_query(
            seek.sort_by, plan.order, plan.bound, plan.comparison, limit.value + 1
        )
    )
    more = len(fetched) > limit.value
    rows = fetched[: limit.value]
    if plan.backward:
        rows.reverse()

    prev_anchor, next_anchor = neighbour_anchors(seek, rows, more)
    window = Window(
        rows=rows,
        prev_page=None if prev_anchor is None else seek.with_anchor(prev_anchor).to_opaque_link(),
        next_page=None if next_anchor is None else seek.with_anchor(next_anchor).to_opaque_link(),
    )
    lazy_logger.debug(
        lambda: f"Window has {len(rows)} rows, more={more}, "
        f"prev={prev_anchor!r}, next={next_anchor!r}"
    )
    return window
