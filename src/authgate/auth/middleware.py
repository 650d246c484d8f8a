"""
authgate.auth.middleware

Upstream identity adapters that run before the gate.

Responsibilities:
- Attach a `Principal` decoded from a bearer JWT (push style).
- Attach an `AuthProbe` to every request (pull style).

Neither adapter rejects requests: admitting or denying is the gate's job.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from authgate.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, principal_from_claims
from authgate.auth.probe import AuthProbe
from authgate.gate.identity import PRINCIPAL_STATE_KEY, PROBE_STATE_KEY
from authgate.observability.logging import get_logger

log = get_logger(__name__)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credentials.strip() or None


class BearerPrincipalMiddleware(BaseHTTPMiddleware):
    """
    Decodes `Authorization: Bearer <jwt>` and stores the resulting `Principal`
    on `request.state.principal`. Missing or invalid tokens leave it unset.
    """

    def __init__(self, app: ASGIApp, *, jwt_config: JwtConfig) -> None:
        super().__init__(app)
        self._jwt_config = jwt_config

    async def dispatch(self, request: Request, call_next) -> Response:
        token = _bearer_token(request)
        if token is not None:
            try:
                payload = decode_and_validate(cfg=self._jwt_config, token=token)
                setattr(request.state, PRINCIPAL_STATE_KEY, principal_from_claims(payload))
            except JwtValidationError as e:
                log.info("bearer_token_rejected", reason=str(e))
        return await call_next(request)


class ProbeMiddleware(BaseHTTPMiddleware):
    """Attaches the same `AuthProbe` instance to every request."""

    def __init__(self, app: ASGIApp, *, probe: AuthProbe) -> None:
        super().__init__(app)
        self._probe = probe

    async def dispatch(self, request: Request, call_next) -> Response:
        setattr(request.state, PROBE_STATE_KEY, self._probe)
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# Wire exactly one of these per app: an attached probe is authoritative, so a
# probe would silently shadow any bearer principal.
