"""
Notes API — Middleware Tests
=============================

Each test mounts the middleware on a bare Starlette app so limiter state
does not leak between tests or from the main app.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from notes_api.config import settings
from notes_api.middleware.rate_limit import RateLimitMiddleware
from notes_api.middleware.request_context import RequestContextMiddleware, request_id_var


async def echo_request_id(request):
    return PlainTextResponse(request_id_var.get())


def build_app(*middleware):
    app = Starlette(routes=[
        Route("/api/notes", echo_request_id),
        Route("/health", echo_request_id),
    ])
    for cls in middleware:
        app.add_middleware(cls)
    return app


def client_for(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestRequestContext:

    @pytest.mark.asyncio
    async def test_generates_id(self):
        async with client_for(build_app(RequestContextMiddleware)) as client:
            response = await client.get("/api/notes")

        rid = response.headers["X-Request-ID"]
        assert len(rid) == 8
        assert response.text == rid

    @pytest.mark.asyncio
    async def test_reuses_client_id(self):
        async with client_for(build_app(RequestContextMiddleware)) as client:
            response = await client.get("/api/notes", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.text == "trace-42"

    @pytest.mark.asyncio
    async def test_access_line_logged(self, caplog):
        caplog.set_level("INFO", logger="notes_api.access")
        async with client_for(build_app(RequestContextMiddleware)) as client:
            await client.get("/api/notes", headers={"X-Request-ID": "abc"})
            await client.get("/health")

        lines = [r.getMessage() for r in caplog.records if r.name == "notes_api.access"]
        assert len(lines) == 1
        assert lines[0].startswith("GET /api/notes -> 200")
        assert "[abc]" in lines[0]


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_rejects_over_budget(self, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_requests", 2)
        async with client_for(build_app(RateLimitMiddleware)) as client:
            statuses = [(await client.get("/api/notes")).status_code for _ in range(3)]
            last = await client.get("/api/notes")

        assert statuses == [200, 200, 429]
        assert last.status_code == 429
        assert int(last.headers["Retry-After"]) >= 1
        assert last.json()["error"] == "rate_limit_exceeded"

    @pytest.mark.asyncio
    async def test_health_not_counted(self, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_requests", 1)
        async with client_for(build_app(RateLimitMiddleware)) as client:
            for _ in range(5):
                assert (await client.get("/health")).status_code == 200
            assert (await client.get("/api/notes")).status_code == 200
