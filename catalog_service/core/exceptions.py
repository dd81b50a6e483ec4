"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
            raise AppException(
            status_code=404,
            detail="Project not found",
            type="project-not-found",
            title="Project Not Found",
            instance="/api/v1/projects/afrika-korps",
            extra={"name": "afrika-korps"}
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            404: "Not Found",
            409: "Conflict",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
            503: "Service Unavailable",
        }
        return titles.get(status_code, "Error")


class ConflictException(AppException):
    """Exception raised for resource conflicts.

    Example:
            raise ConflictException(
            detail="Project 'afrika-korps' already exists",
            type="project-exists",
            extra={"name": "afrika-korps"}
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "conflict",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=409,
            detail=detail,
            type=type,
            title="Conflict",
            instance=instance,
            extra=extra,
        )


class BadRequestException(AppException):
    """Exception raised for malformed requests."""

    def __init__(
        self,
        detail: str,
        type: str = "bad-request",
        title: str = "Bad Request",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize bad request exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title=title,
            instance=instance,
            extra=extra,
        )


class MalformedQueryException(BadRequestException):
    """Listing query could not be understood.

    Raised for bad seek tokens, unknown sort/order/anchor tags, anchors that
    do not fit the sort criterion, and contradictory query parameters.

    Example:
            raise MalformedQueryException(
            detail="seek cannot be combined with sort",
            extra={"parameter": "sort"}
        )
    """

    def __init__(
        self,
        detail: str,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            detail=detail,
            type="malformed-query",
            title="Malformed Query",
            instance=instance,
            extra=extra,
        )


class LimitOutOfRangeException(BadRequestException):
    """Page size is numeric but outside the accepted range."""

    def __init__(
        self,
        value: int | str,
        minimum: int,
        maximum: int,
        instance: str | None = None,
    ) -> None:
        super().__init__(
            detail=f"limit must be between {minimum} and {maximum}, got {value}",
            type="limit-out-of-range",
            title="Limit Out Of Range",
            instance=instance,
            extra={"limit": value, "minimum": minimum, "maximum": maximum},
        )
        self.value = value
