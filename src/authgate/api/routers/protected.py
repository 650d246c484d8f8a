"""
authgate.api.routers.protected

Sample handlers behind the gate.

Responsibilities:
- `/app/*`: guarded by `AuthGateMiddleware` (prefix coverage).
- `/v1/me`: guarded per route with the gate as a dependency.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from authgate.api.deps import require_login
from authgate.auth.models import Principal
from authgate.gate.identity import get_principal

app_router = APIRouter(prefix="/app", tags=["app"])
me_router = APIRouter(prefix="/v1", tags=["me"])


def _describe(principal: Any | None) -> dict[str, Any]:
    if isinstance(principal, Principal):
        return {"subject": principal.subject, "roles": sorted(principal.roles)}
    # Admitted by a probe; there may be no principal at all.
    return {"subject": None, "roles": []}


@app_router.get("/{page:path}")
async def app_page(page: str, request: Request) -> dict[str, Any]:
    return {"page": page, "principal": _describe(get_principal(request))}


@me_router.get("/me")
async def me(principal: Any | None = Depends(require_login)) -> dict[str, Any]:
    return _describe(principal)


# --- Module Notes -----------------------------------------------------------
# Prefix coverage and per-route dependencies are interchangeable; a route under
# a protected prefix that also depends on the gate is evaluated twice, harmlessly.
