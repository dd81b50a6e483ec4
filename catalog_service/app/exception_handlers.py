"""Global exception handlers for FastAPI application.

Every error leaves the service as an RFC 7807 problem document. Client
errors are logged at WARNING; anything unexpected is logged at ERROR with
its traceback and answered with an opaque 500.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog_service.core.database import NotFoundError
from catalog_service.core.exceptions import AppException
from catalog_service.core.schemas import (
    PROBLEM_JSON,
    ProblemDetail,
    ValidationErrorItem,
    ValidationProblemDetail,
)

logger = logging.getLogger(__name__)


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _create_problem_detail(
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create RFC 7807 Problem Details body.

    Args:
        status_code: HTTP status code.
        detail: Human-readable error description.
        type_: Error type identifier.
        title: Short human-readable summary.
        instance: URI identifying this occurrence.
        extra: Additional members merged into the body.

    Returns:
        Dictionary representing the problem detail.
    """
    problem = ProblemDetail(
        type=type_,
        title=title or ProblemDetail.default_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance,
    )
    response_data = problem.model_dump(mode="json", exclude_none=True)
    if extra:
        for key, value in extra.items():
            response_data.setdefault(key, value)
    return response_data


def _problem_response(
    request: Request, status_code: int, problem_data: dict[str, Any]
) -> JSONResponse:
    request_id = _get_request_id(request)
    if request_id:
        problem_data["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=problem_data, media_type=PROBLEM_JSON)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert an AppException into a problem response."""
    logger.warning(
        "Application exception occurred",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    problem_data = _create_problem_detail(
        status_code=exc.status_code,
        detail=exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance or str(request.url),
        extra=exc.extra,
    )
    return _problem_response(request, exc.status_code, problem_data)


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Map repository lookups that found nothing onto 404."""
    logger.warning(
        "Entity not found",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "model": exc.model_name,
        },
    )
    problem_data = _create_problem_detail(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=exc.message,
        type_=f"{exc.model_name.lower()}-not-found",
        instance=str(request.url),
        extra=exc.identifier,
    )
    return _problem_response(request, status.HTTP_404_NOT_FOUND, problem_data)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors with field-level details."""
    validation_errors = [
        ValidationErrorItem(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            type=error["type"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
        },
    )

    problem = ValidationProblemDetail(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(validation_errors)} field(s)",
        instance=str(request.url),
        errors=validation_errors,
    )
    return _problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        problem.model_dump(mode="json", exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected exceptions; never exposes internals."""
    logger.error(
        "Unexpected exception occurred",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    problem_data = _create_problem_detail(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred while processing your request",
        type_="internal-error",
        title="Internal Server Error",
        instance=str(request.url),
    )
    return _problem_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, problem_data)


def configure_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the application."""
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NotFoundError, not_found_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
    logger.debug("Exception handlers configured")
