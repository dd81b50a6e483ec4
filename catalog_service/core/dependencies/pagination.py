"""Listing parameter dependency for FastAPI routes.

Query parameters arrive as raw strings and are normalized into a seek and a
limit, so malformed values surface as ``malformed-query`` or
``limit-out-of-range`` problems instead of FastAPI validation errors.

Usage:
    from catalog_service.core.dependencies.pagination import ListingParamsDep

    @router.get("/projects")
    async def list_projects(params: ListingParamsDep) -> ProjectsResponse:
        window = await fetch_window(storage, params.seek, params.limit)
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query

from catalog_service.core.pagination import ListingParams, normalize_listing_params
from catalog_service.core.settings import get_pagination_settings


def get_listing_params(
    seek: Annotated[
        str | None,
        Query(description="Opaque token from a previous page's prev/next link"),
    ] = None,
    sort: Annotated[
        str | None,
        Query(description="Sort: p (name), t (title), m (modified), c (created)"),
    ] = None,
    order: Annotated[str | None, Query(description="Direction: a or d")] = None,
    q: Annotated[str | None, Query(description="Free-text query, sorts by relevance")] = None,
    from_: Annotated[
        str | None,
        Query(alias="from", description="Start at the first row reaching this sort value"),
    ] = None,
    limit: Annotated[str | None, Query(description="Page size (1-100)")] = None,
) -> ListingParams:
    """Normalize listing query parameters.

    Raises:
        MalformedQueryException: On conflicting or unparseable parameters.
        LimitOutOfRangeException: If ``limit`` is outside ``1..100``.
    """
    settings = get_pagination_settings()
    return normalize_listing_params(
        seek=seek,
        sort=sort,
        order=order,
        q=q,
        from_=from_,
        limit=limit,
        default_limit=settings.default_limit,
    )


ListingParamsDep = Annotated[ListingParams, Depends(get_listing_params)]
