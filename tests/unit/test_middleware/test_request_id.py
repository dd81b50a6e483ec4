"""Unit tests for the request ID middleware."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from catalog_service.app.middleware.request_id import RequestIDMiddleware
from catalog_service.infra.logging import get_log_context


@pytest.fixture
async def client():
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/context")
    async def context():
        return get_log_context()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestRequestIDMiddleware:
    async def test_echoes_incoming_header(self, client: AsyncClient):
        response = await client.get("/context", headers={"X-Request-ID": "req-42"})

        assert response.headers["x-request-id"] == "req-42"
        assert response.json() == {"request_id": "req-42"}

    async def test_generates_when_missing(self, client: AsyncClient):
        first = await client.get("/context")
        second = await client.get("/context")

        assert first.headers["x-request-id"]
        assert first.headers["x-request-id"] != second.headers["x-request-id"]
        assert first.json()["request_id"] == first.headers["x-request-id"]

    async def test_context_cleared_after_request(self, client: AsyncClient):
        await client.get("/context", headers={"X-Request-ID": "req-43"})

        assert "request_id" not in get_log_context()
