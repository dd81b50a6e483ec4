"""Shared API schemas."""

from catalog_service.core.schemas.problem_details import (
    PROBLEM_JSON,
    ProblemDetail,
    ValidationErrorItem,
    ValidationProblemDetail,
)

__all__ = [
    "PROBLEM_JSON",
    "ProblemDetail",
    "ValidationErrorItem",
    "ValidationProblemDetail",
]
