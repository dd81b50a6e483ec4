"""Pagination response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from catalog_service.core.pagination.window import Window


class PaginationMeta(BaseModel):
    """Navigation metadata returned next to a page of rows.

    Attributes:
        prev_page: Query string of the previous page, if any.
        next_page: Query string of the next page, if any.
        total: Number of rows in the whole listing.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "prev_page": None,
                "next_page": "?seek=cCxhLGEsZSwsNQ",
                "total": 10,
            }
        },
    )

    prev_page: str | None = Field(default=None, description="Link to the previous page")
    next_page: str | None = Field(default=None, description="Link to the next page")
    total: int = Field(ge=0, description="Total number of rows in the listing")

    @classmethod
    def from_window(cls, window: Window[Any], total: int) -> PaginationMeta:
        return cls(
            prev_page=window.prev_page.href if window.prev_page else None,
            next_page=window.next_page.href if window.next_page else None,
            total=total,
        )
