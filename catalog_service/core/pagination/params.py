"""Normalization of listing query parameters into a seek and a limit."""

from __future__ import annotations

from dataclasses import dataclass

from catalog_service.core.exceptions import MalformedQueryException
from catalog_service.core.pagination.anchor import MAX_TIEBREAK_ID, After, Anchor, Start
from catalog_service.core.pagination.limit import DEFAULT_LIMIT, Limit
from catalog_service.core.pagination.seek import Seek, SeekLink
from catalog_service.core.pagination.sorting import Direction, SortBy, SortField

DEFAULT_SORT = SortBy(SortField.PROJECT_NAME)


@dataclass(frozen=True, slots=True)
class ListingParams:
    """Where a listing request starts and how many rows it wants."""

    seek: Seek
    limit: Limit


def _from_anchor(key: str, direction: Direction) -> Anchor:
    # Ids start at 1, so 0 (or the largest id when descending) puts the
    # anchor just ahead of every row whose sort value equals ``key``.
    tiebreak_id = 0 if direction is Direction.ASCENDING else MAX_TIEBREAK_ID
    return After(key, tiebreak_id)


def _page_size(limit: str | None, default_limit: int) -> Limit:
    return Limit(default_limit) if limit is None else Limit.parse(limit)


def normalize_listing_params(
    *,
    seek: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    q: str | None = None,
    from_: str | None = None,
    limit: str | None = None,
    default_limit: int = DEFAULT_LIMIT,
) -> ListingParams:
    """Build the seek and limit of a listing request.

    A ``seek`` token fully determines criteria and position, so it may not
    be combined with ``sort``, ``order``, ``q`` or ``from``. Without a token:

    - ``q`` selects a relevance listing, descending unless ``order`` says
      otherwise, starting at the top;
    - otherwise ``sort`` (default by name) and ``order`` (default per sort)
      apply, starting at the top, or at the first row whose sort value
      reaches ``from``.

    Args:
        seek: Opaque seek token.
        sort: Sort tag (``p``, ``t``, ``m`` or ``c``).
        order: Direction tag (``a`` or ``d``).
        q: Free-text query.
        from_: Sort value to start the listing at.
        limit: Page size text.
        default_limit: Page size when ``limit`` is absent.

    Returns:
        Normalized parameters.

    Raises:
        MalformedQueryException: On conflicting or unparseable parameters.
        LimitOutOfRangeException: If ``limit`` is outside ``1..100``. Checked
            after the criteria, so conflicting parameters win.
    """
    if seek is not None:
        conflicting = [
            name
            for name, value in (("sort", sort), ("order", order), ("q", q), ("from", from_))
            if value is not None
        ]
        if conflicting:
            raise MalformedQueryException(
                detail=f"seek cannot be combined with {', '.join(conflicting)}",
                extra={"parameters": ["seek", *conflicting]},
            )
        return ListingParams(SeekLink.parse(seek).seek, _page_size(limit, default_limit))

    if q is not None:
        for name, value in (("sort", sort), ("from", from_)):
            if value is not None:
                raise MalformedQueryException(
                    detail=f"q cannot be combined with {name}",
                    extra={"parameters": ["q", name]},
                )
        sort_by = SortBy.relevance(q)
    elif sort is not None:
        sort_by = SortBy.from_tag(sort)
        if sort_by.is_relevance:
            raise MalformedQueryException(
                detail="relevance sort is selected with the q parameter",
                extra={"parameter": "sort"},
            )
    else:
        sort_by = DEFAULT_SORT

    direction = sort_by.default_direction() if order is None else Direction.from_tag(order)
    anchor = Start() if from_ is None else _from_anchor(from_, direction)
    return ListingParams(Seek(sort_by, direction, anchor), _page_size(limit, default_limit))
