"""
authgate.api.routers.login

Dev login served at the gate's configured login path.

Responsibilities:
- GET: describe the pending login (where the client will be sent afterwards).
- POST: mark the session authenticated and redirect to the stored `returnTo`.

In prod the login path belongs to the real identity provider, so both
handlers answer 404 there.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field
from starlette.status import HTTP_303_SEE_OTHER, HTTP_409_CONFLICT

from authgate.api.deps import dev_only, settings_dep
from authgate.auth.probe import SESSION_AUTH_FLAG
from authgate.gate.decision import RETURN_TO_KEY, resolve_return_to
from authgate.gate.identity import get_session
from authgate.settings import Settings


class DevLoginRequest(BaseModel):
    subject: str = Field(min_length=1, max_length=256)


def build_login_router(login_path: str) -> APIRouter:
    router = APIRouter(tags=["login"], dependencies=[Depends(dev_only)])

    @router.get(login_path)
    async def login_page(
        request: Request,
        settings: Settings = Depends(settings_dep),
    ) -> dict[str, Any]:
        session = get_session(request) or {}
        return {
            "login_path": login_path,
            "identity_mode": settings.identity_mode,
            "return_to": session.get(RETURN_TO_KEY, settings.default_return_path),
        }

    @router.post(login_path)
    async def complete_login(
        request: Request,
        body: DevLoginRequest,
        settings: Settings = Depends(settings_dep),
    ) -> RedirectResponse:
        session = get_session(request)
        if session is None:
            raise HTTPException(status_code=HTTP_409_CONFLICT, detail="No session")
        session[SESSION_AUTH_FLAG] = True
        session["subject"] = body.subject
        target = resolve_return_to(session, default=settings.default_return_path)
        return RedirectResponse(target, status_code=HTTP_303_SEE_OTHER)

    return router


# --- Module Notes -----------------------------------------------------------
# The session flag set here is what `SessionFlagProbe` reads in session mode.
