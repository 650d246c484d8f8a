"""
tests.test_app

End-to-end tests through the composed FastAPI app.

Responsibilities:
- Health endpoints stay reachable without credentials.
- Bearer and session identity modes both flow through the gate.
- A denied request's path survives the round trip through login.
"""

from __future__ import annotations

import httpx
import pytest

from authgate.api.app import create_app
from authgate.settings import Settings


def _client(settings: Settings) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=create_app(settings=settings))
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
async def test_health_endpoints() -> None:
    async with _client(Settings(env="test")) as client:
        r = await client.get("/healthz")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert r.headers["x-request-id"]

        r = await client.get("/readyz")
        assert r.status_code == 200
        assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_bearer_mode_pass_and_deny() -> None:
    async with _client(Settings(env="test")) as client:
        r = await client.get("/app/dashboard")
        assert r.status_code == 302
        assert r.headers["location"] == "/api/login"

        r = await client.get(r.headers["location"])
        assert r.status_code == 200
        assert r.json()["return_to"] == "/app/dashboard"

        r = await client.get("/app/dashboard", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 302

        r = await client.post("/v1/dev/token", json={"subject": "u1", "roles": ["viewer"]})
        assert r.status_code == 200
        auth = {"Authorization": f"Bearer {r.json()['access_token']}"}

        r = await client.get("/app/dashboard", headers=auth)
        assert r.status_code == 200
        assert r.json() == {"page": "dashboard", "principal": {"subject": "u1", "roles": ["viewer"]}}

        r = await client.get("/v1/me", headers=auth)
        assert r.status_code == 200
        assert r.json()["subject"] == "u1"


@pytest.mark.asyncio
async def test_route_dependency_denies_with_configured_login_path() -> None:
    async with _client(Settings(env="test", login_path="/sso/start")) as client:
        r = await client.get("/v1/me")
        assert r.status_code == 302
        assert r.headers["location"] == "/sso/start"


@pytest.mark.asyncio
async def test_session_mode_returns_to_original_destination() -> None:
    async with _client(Settings(env="test", identity_mode="session")) as client:
        r = await client.get("/app/billing", params={"tab": "invoices"})
        assert r.status_code == 302
        assert r.headers["location"] == "/api/login"

        login = r.headers["location"]
        r = await client.get(login)
        assert r.status_code == 200
        assert r.json()["return_to"] == "/app/billing?tab=invoices"

        r = await client.post(login, json={"subject": "u1"})
        assert r.status_code == 303
        assert r.headers["location"] == "/app/billing?tab=invoices"

        r = await client.get("/app/billing")
        assert r.status_code == 200
        # Admitted by the session probe; no principal is attached in this mode.
        assert r.json()["principal"] == {"subject": None, "roles": []}


@pytest.mark.asyncio
async def test_session_mode_login_without_pending_return() -> None:
    async with _client(Settings(env="test", identity_mode="session")) as client:
        r = await client.post("/api/login", json={"subject": "u1"})
        assert r.status_code == 303
        assert r.headers["location"] == "/"


@pytest.mark.asyncio
async def test_dev_endpoints_hidden_in_prod() -> None:
    async with _client(Settings(env="prod")) as client:
        r = await client.post("/v1/dev/token", json={"subject": "u1"})
        assert r.status_code == 404

        r = await client.get("/api/login")
        assert r.status_code == 404


@pytest.mark.asyncio
async def test_login_path_under_protected_prefix_is_reachable() -> None:
    settings = Settings(env="test", identity_mode="session", login_path="/app/login")
    async with _client(settings) as client:
        r = await client.get("/app/reports")
        assert r.status_code == 302
        assert r.headers["location"] == "/app/login"

        r = await client.get(r.headers["location"])
        assert r.status_code == 200
        assert r.json()["return_to"] == "/app/reports"


@pytest.mark.asyncio
async def test_request_id_echoed_on_denial() -> None:
    async with _client(Settings(env="test")) as client:
        r = await client.get("/app/x", headers={"x-request-id": "req-123"})
        assert r.status_code == 302
        assert r.headers["x-request-id"] == "req-123"
