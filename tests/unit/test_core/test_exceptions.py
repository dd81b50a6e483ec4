"""Unit tests for application and repository exceptions."""

from __future__ import annotations

import pytest

from catalog_service.core import exceptions
from catalog_service.core.database import NotFoundError, RepositoryError
from catalog_service.core.exceptions import (
    AppException,
    BadRequestException,
    ConflictException,
    LimitOutOfRangeException,
    MalformedQueryException,
)


class TestAppExceptions:
    def test_default_title(self):
        exc = AppException(status_code=503, detail="database unavailable")

        assert exc.title == "Service Unavailable"
        assert exc.type == "about:blank"
        assert exc.extra == {}

    def test_conflict(self):
        exc = ConflictException(detail="exists", type="project-exists", extra={"name": "a"})

        assert (exc.status_code, exc.title, exc.type) == (409, "Conflict", "project-exists")
        assert exc.extra == {"name": "a"}

    def test_malformed_query_is_a_bad_request(self):
        exc = MalformedQueryException(detail="seek cannot be combined with sort")

        assert isinstance(exc, BadRequestException)
        assert (exc.status_code, exc.type) == (400, "malformed-query")
        assert str(exc) == "seek cannot be combined with sort"

    def test_limit_out_of_range_carries_bounds(self):
        exc = LimitOutOfRangeException(0, 1, 100)

        assert isinstance(exc, BadRequestException)
        assert not isinstance(exc, MalformedQueryException)
        assert exc.extra == {"limit": 0, "minimum": 1, "maximum": 100}
        assert exc.detail == "limit must be between 1 and 100, got 0"

    def test_missing_resources_use_not_found_error(self):
        http_errors = [
            obj
            for obj in vars(exceptions).values()
            if isinstance(obj, type) and issubclass(obj, AppException)
        ]

        assert all(cls(**_sample_args(cls)).status_code != 404 for cls in http_errors)
        assert not issubclass(NotFoundError, AppException)


def _sample_args(cls: type[AppException]) -> dict[str, object]:
    if cls is AppException:
        return {"status_code": 500, "detail": "boom"}
    if cls is LimitOutOfRangeException:
        return {"value": 0, "minimum": 1, "maximum": 100}
    return {"detail": "boom"}


class TestRepositoryErrors:
    def test_not_found_message(self):
        exc = NotFoundError("Project", {"name": "nope"})

        assert exc.model_name == "Project"
        assert exc.identifier == {"name": "nope"}
        assert "Project not found" in str(exc)
        assert "name='nope'" in str(exc)
        assert isinstance(exc, RepositoryError)

    def test_raised_and_caught_as_repository_error(self):
        with pytest.raises(RepositoryError):
            raise NotFoundError("Project", {"name": "nope"})
