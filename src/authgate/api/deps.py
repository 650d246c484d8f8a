"""
authgate.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the app-wide gate.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_404_NOT_FOUND

from authgate.gate.middleware import AuthGate
from authgate.settings import Settings, get_settings


def settings_dep(request: Request) -> Settings:
    # Prefer the settings the app was built with; fall back to the env-driven default.
    return getattr(request.app.state, "settings", None) or get_settings()


def dev_only(settings: Settings = Depends(settings_dep)) -> None:
    # Dev conveniences stand in for the real identity provider; hide them in prod.
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")


def gate_from_app(request: Request) -> AuthGate:
    # The gate is built once in `authgate.api.app.create_app`.
    return request.app.state.gate  # type: ignore[attr-defined]


async def require_login(request: Request) -> Any | None:
    """Route-level gate: returns the principal on pass, redirects to login on deny."""
    return await gate_from_app(request)(request)
