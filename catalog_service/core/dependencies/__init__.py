"""FastAPI dependencies for route handlers.

Usage:
    from catalog_service.core.dependencies import DbSession, ListingParamsDep

    @router.get("/projects")
    async def list_projects(session: DbSession, params: ListingParamsDep):
        ...
"""

from catalog_service.core.dependencies.database import DbSession, get_db_session
from catalog_service.core.dependencies.pagination import ListingParamsDep, get_listing_params

__all__ = [
    "DbSession",
    "ListingParamsDep",
    "get_db_session",
    "get_listing_params",
]
