"""Pagination settings for listing endpoints.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=25
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_service.core.pagination.limit import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    The accepted page size range is fixed; only the default is tunable.
    """

    default_limit: int = Field(
        default=DEFAULT_LIMIT,
        ge=MIN_LIMIT,
        le=MAX_LIMIT,
        description="Page size when the request has no limit parameter",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
