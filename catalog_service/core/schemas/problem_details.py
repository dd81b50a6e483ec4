"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PROBLEM_JSON = "application/problem+json"

_DEFAULT_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        description="URI reference identifying the problem type",
    )
    title: str = Field(min_length=1, description="Short, human-readable summary of the problem")
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "malformed-query",
                "title": "Malformed Query",
                "status": 400,
                "detail": "seek cannot be combined with sort",
                "instance": "/api/v1/projects?seek=cCxhLHMsLCw&sort=t",
            }
        },
    )

    @staticmethod
    def default_title(status_code: int) -> str:
        return _DEFAULT_TITLES.get(status_code, "Error")


class ValidationErrorItem(BaseModel):
    """One field-level validation failure."""

    field: str
    message: str
    type: str
    value: Any = None


class ValidationProblemDetail(ProblemDetail):
    """Problem detail carrying field-level validation errors."""

    errors: list[ValidationErrorItem] = Field(default_factory=list)
