"""Keyset (seek) pagination.

Listings are paged with opaque seek tokens instead of offsets, so pages stay
stable while rows are inserted, deleted or re-sorted between requests:

    @router.get("/projects", response_model=ProjectsResponse)
    async def list_projects(params: ListingParamsDep, ...) -> ProjectsResponse:
        window = await fetch_window(repository, params.seek, params.limit)
        total = await repository.count(params.seek.sort_by)
        return ProjectsResponse(
            projects=[...],
            meta=PaginationMeta.from_window(window, total),
        )

A seek combines the sort criterion, the direction and an anchor row; its
token is URL-safe base64 over ``sort,dir,anchor,field,rank,id``.
"""

from catalog_service.core.pagination.anchor import (
    After,
    AfterRanked,
    Anchor,
    AnchorRecord,
    AnchorTag,
    Before,
    BeforeRanked,
    End,
    Start,
)
from catalog_service.core.pagination.limit import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT, Limit
from catalog_service.core.pagination.params import ListingParams, normalize_listing_params
from catalog_service.core.pagination.schemas import PaginationMeta
from catalog_service.core.pagination.seek import Seek, SeekLink
from catalog_service.core.pagination.sorting import Direction, SortBy, SortField
from catalog_service.core.pagination.window import (
    Bound,
    Comparison,
    RangeStorage,
    SeekableRow,
    Window,
    WindowPlan,
    fetch_window,
)

__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MIN_LIMIT",
    # Anchors
    "After",
    "AfterRanked",
    "Anchor",
    "AnchorRecord",
    "AnchorTag",
    "Before",
    "BeforeRanked",
    # Engine
    "Bound",
    "Comparison",
    # Criteria
    "Direction",
    "End",
    "Limit",
    "ListingParams",
    "PaginationMeta",
    "RangeStorage",
    "Seek",
    "SeekLink",
    "SeekableRow",
    "SortBy",
    "SortField",
    "Start",
    "Window",
    "WindowPlan",
    "fetch_window",
    "normalize_listing_params",
]
