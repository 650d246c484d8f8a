"""
authgate.gate.middleware

The gate itself.

Responsibilities:
- Evaluate the predicate and branch to Pass (continue) or Deny (redirect).
- On Deny, record the intended destination in the session, best-effort.
- Attach either as Starlette middleware over a group of routes or as a FastAPI
  dependency on a single route/router.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from fastapi import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.status import HTTP_302_FOUND
from starlette.types import ASGIApp

from authgate.gate.config import GateConfig
from authgate.gate.decision import GateDecision, apply_session_writes, decide
from authgate.gate.errors import SessionUnavailable
from authgate.gate.identity import get_principal, get_request_path, get_session
from authgate.gate.predicate import is_authenticated_async
from authgate.observability.logging import get_logger

log = get_logger(__name__)


class AuthGate:
    """
    Pass/deny interceptor bound to a `GateConfig`.

    Used as a dependency (`Depends(gate)`) it returns the attached principal on
    Pass (None when a probe admitted the request) and raises a 302
    `HTTPException` on Deny.
    """

    def __init__(self, config: GateConfig) -> None:
        self.config = config

    async def evaluate(self, request: Request) -> GateDecision:
        authenticated = await is_authenticated_async(request)
        return decide(
            authenticated=authenticated,
            path=get_request_path(request),
            config=self.config,
        )

    def _record_return_to(self, request: Request, decision: GateDecision) -> None:
        try:
            apply_session_writes(get_session(request), decision.session_writes)
        except SessionUnavailable:
            log.debug("auth_gate.session_unavailable")
        except Exception:
            # Any session store fault: the redirect still goes out.
            log.warning("auth_gate.session_write_failed", exc_info=True)

    def _deny(self, request: Request, decision: GateDecision) -> str:
        self._record_return_to(request, decision)
        log.info("auth_gate.deny", redirect_to=decision.redirect_to)
        return decision.redirect_to or self.config.login_path

    async def dispatch(self, request: Request, call_next) -> Response:
        decision = await self.evaluate(request)
        if decision.passed:
            log.debug("auth_gate.pass")
            return await call_next(request)
        return RedirectResponse(self._deny(request, decision), status_code=HTTP_302_FOUND)

    async def __call__(self, request: Request) -> Any | None:
        decision = await self.evaluate(request)
        if decision.passed:
            log.debug("auth_gate.pass")
            return get_principal(request)
        location = self._deny(request, decision)
        raise HTTPException(
            status_code=HTTP_302_FOUND,
            detail="Login required",
            headers={"Location": location},
        )


class AuthGateMiddleware(BaseHTTPMiddleware):
    """
    Runs `gate` for every request whose path equals or sits below one of
    `protected_prefixes`. With no prefixes every request is gated.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        gate: AuthGate,
        protected_prefixes: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self._gate = gate
        self._prefixes = tuple(p.rstrip("/") or "/" for p in protected_prefixes)

    def _is_protected(self, path: str) -> bool:
        if not self._prefixes:
            return True
        for prefix in self._prefixes:
            if prefix == "/" or path == prefix or path.startswith(prefix + "/"):
                return True
        return False

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.scope.get("path", "")
        # The login path is never gated, even under a protected prefix.
        if path == self._gate.config.login_path or not self._is_protected(path):
            return await call_next(request)
        return await self._gate.dispatch(request, call_next)


# --- Module Notes -----------------------------------------------------------
# Concurrent denied requests from one client may race on `returnTo`; last write
# wins. The value only steers the post-login redirect, so no locking.
