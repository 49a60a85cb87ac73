"""앱 레벨 API 테스트.

App-level tests — service routes, the shared error envelope (unknown
route, validation, unhandled exception) and the request logging middleware.
"""

import logging
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from academy.config import settings
from academy.middleware.request_logging import RequestLoggingMiddleware, mask_sensitive
from academy.services.course_service import course_service


class TestServiceRoutes:
    """서비스 경로 테스트."""

    async def test_root(self, client: AsyncClient):
        res = await client.get("/")
        assert res.status_code == 200
        assert res.json() == {"message": settings.APP_NAME, "version": settings.APP_VERSION}

    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.json() == {"status": "ok"}

    async def test_favicon(self, client: AsyncClient):
        res = await client.get("/favicon.ico")
        assert res.status_code == 204
        assert res.content == b""


class TestErrorEnvelope:
    """오류 응답 형식 테스트."""

    async def test_unknown_route(self, client: AsyncClient):
        res = await client.get("/api/nothing-here")
        assert res.status_code == 404
        assert res.json() == {"error": "Route not found: GET /api/nothing-here"}

    async def test_validation_details(self, client: AsyncClient):
        res = await client.post("/api/users", json={"name": "No Email"})
        assert res.status_code == 422
        body = res.json()
        assert body["error"] == "Request validation failed"
        assert any(d["loc"][-1] == "email" for d in body["details"])

    async def test_malformed_json(self, client: AsyncClient):
        res = await client.post(
            "/api/users", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert res.status_code == 422
        assert res.json()["error"] == "Request validation failed"

    async def test_unhandled_exception(self, client: AsyncClient, monkeypatch):
        async def _boom(db):
            raise RuntimeError("database exploded")

        monkeypatch.setattr(course_service, "list_categories", _boom)
        res = await client.get("/api/courses/categories")
        assert res.status_code == 500
        assert res.json() == {"error": "database exploded"}


class _FakeAxiom:
    """Axiom 클라이언트 대역 — Records ingested events."""

    def __init__(self, fail: bool = False) -> None:
        self.events: list[tuple[str, list[dict[str, Any]]]] = []
        self.fail = fail

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> None:
        if self.fail:
            raise ConnectionError("axiom unreachable")
        self.events.append((dataset, events))


async def _echo(request: Request) -> JSONResponse:
    return JSONResponse({"ok": True})


async def _reject(request: Request) -> JSONResponse:
    return JSONResponse({"error": "Course not found"}, status_code=404)


def _logged_app(fake: _FakeAxiom) -> RequestLoggingMiddleware:
    inner = Starlette(routes=[
        Route("/echo", _echo, methods=["POST"]),
        Route("/reject", _reject, methods=["GET"]),
        Route("/health", _echo, methods=["GET"]),
    ])
    middleware = RequestLoggingMiddleware(inner)
    middleware._client = fake
    middleware._dataset = "academy-test"
    return middleware


class TestRequestLogging:
    """요청 로깅 미들웨어 테스트."""

    async def test_logs_every_request(self, client: AsyncClient, caplog):
        with caplog.at_level(logging.INFO, logger="academy.middleware.request_logging"):
            await client.get("/api/courses")
        assert any("GET /api/courses 200" in record.getMessage() for record in caplog.records)

    async def test_ships_masked_body(self):
        fake = _FakeAxiom()
        async with AsyncClient(transport=ASGITransport(app=_logged_app(fake)), base_url="http://test") as ac:
            res = await ac.post("/echo", json={"email": "a@test.com", "password": "hunter2"})
        assert res.json() == {"ok": True}

        dataset, events = fake.events[0]
        assert dataset == "academy-test"
        assert events[0]["request_body"] == {"email": "a@test.com", "password": "***"}
        assert events[0]["status_code"] == 200

    async def test_ships_error_reason(self):
        fake = _FakeAxiom()
        async with AsyncClient(transport=ASGITransport(app=_logged_app(fake)), base_url="http://test") as ac:
            res = await ac.get("/reject")
        assert res.status_code == 404
        assert res.json() == {"error": "Course not found"}
        assert fake.events[0][1][0]["error"] == "Course not found"

    async def test_skips_health(self):
        fake = _FakeAxiom()
        async with AsyncClient(transport=ASGITransport(app=_logged_app(fake)), base_url="http://test") as ac:
            await ac.get("/health")
        assert fake.events == []

    async def test_ingest_failure_does_not_fail_request(self, caplog):
        fake = _FakeAxiom(fail=True)
        async with AsyncClient(transport=ASGITransport(app=_logged_app(fake)), base_url="http://test") as ac:
            with caplog.at_level(logging.WARNING):
                res = await ac.post("/echo", json={})
        assert res.status_code == 200
        assert any("Failed to ship request log" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ({"password": "x", "name": "n"}, {"password": "***", "name": "n"}),
        ({"user": {"accessToken": "t"}}, {"user": {"accessToken": "***"}}),
        ([{"api_key": "k"}], [{"api_key": "***"}]),
        ("plain", "plain"),
    ],
)
def test_mask_sensitive(data, expected):
    assert mask_sensitive(data) == expected
