"""Unit tests for problem detail rendering."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from catalog_service.app.exception_handlers import configure_exception_handlers
from catalog_service.app.middleware import configure_middleware
from catalog_service.core.database import NotFoundError
from catalog_service.core.exceptions import (
    ConflictException,
    LimitOutOfRangeException,
    MalformedQueryException,
)
from catalog_service.core.schemas import PROBLEM_JSON

@pytest.fixture
def error_app() -> FastAPI:
    app = FastAPI()
    configure_exception_handlers(app)
    configure_middleware(app)

    @app.get("/malformed")
    async def malformed():
        raise MalformedQueryException(detail="seek cannot be combined with sort")

    @app.get("/limit")
    async def limit():
        raise LimitOutOfRangeException(101, 1, 100)

    @app.get("/conflict")
    async def conflict():
        raise ConflictException(detail="Project 'a' already exists", type="project-exists")

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Project", {"name": "nope"})

    @app.get("/crash")
    async def crash():
        raise RuntimeError("secret connection string")

    @app.get("/typed")
    async def typed(count: int):
        return {"count": count}

    return app

@pytest.fixture
async def error_client(error_app: FastAPI):
    transport = ASGITransport(app=error_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

class TestProblemDetails:
    async def test_malformed_query(self, error_client: AsyncClient):
        response = await error_client.get("/malformed")

        assert response.status_code == 400
        assert response.headers["content-type"].startswith(PROBLEM_JSON)
        body = response.json()
        assert body["type"] == "malformed-query"
        assert body["title"] == "Malformed Query"
        assert body["status"] == 400
        assert body["detail"] == "seek cannot be combined with sort"
        assert body["instance"] == "http://test/malformed"
        assert body["request_id"] == response.headers["x-request-id"]

    async def test_limit_out_of_range_carries_bounds(self, error_client: AsyncClient):
        body = (await error_client.get("/limit")).json()

        assert body["type"] == "limit-out-of-range"
        assert (body["limit"], body["minimum"], body["maximum"]) == (101, 1, 100)

    async def test_conflict(self, error_client: AsyncClient):
        response = await error_client.get("/conflict")

        assert response.status_code == 409
        assert response.json()["type"] == "project-exists"

    async def test_not_found_error(self, error_client: AsyncClient):
        response = await error_client.get("/missing")

        assert response.status_code == 404
        body = response.json()
        assert body["type"] == "project-not-found"
        assert body["name"] == "nope"

    async def test_validation_error(self, error_client: AsyncClient):
        response = await error_client.get("/typed", params={"count": "many"})

        assert response.status_code == 422
        body = response.json()
        assert body["type"] == "validation-error"
        assert body["errors"][0]["field"] == "query.count"

    async def test_unexpected_error_is_opaque(self, error_client: AsyncClient):
        response = await error_client.get("/crash")

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "internal-error"
        assert "secret" not in response.text
