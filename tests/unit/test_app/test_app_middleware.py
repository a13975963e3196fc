"""Tests for request ID and timing middleware."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from travel_service.app.middleware import RequestIDMiddleware, TimingMiddleware
from travel_service.infra.logging import get_log_context


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(TimingMiddleware, threshold=0.0)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/context")
    async def context():
        return get_log_context()

    return app


@pytest.fixture
async def client(app: FastAPI):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_request_id_generated_and_in_log_context(client) -> None:
    response = await client.get("/context")

    request_id = response.headers["X-Request-ID"]
    assert len(request_id) == 36
    assert response.json()["request_id"] == request_id
    assert response.json()["path"] == "/context"


@pytest.mark.asyncio
async def test_slow_requests_are_logged(client, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="travel_service.app.middleware"):
        response = await client.get("/context")

    assert "X-Process-Time" in response.headers
    assert any(record.getMessage() == "Slow request" for record in caplog.records)
