"""HTTP middleware."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog_service.app.middleware.request_id import RequestIDMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI


def configure_middleware(app: FastAPI) -> None:
    """Register middleware; the last added runs first."""
    app.add_middleware(RequestIDMiddleware)


__all__ = ["RequestIDMiddleware", "configure_middleware"]
