"""
authgate.gate.identity

Identity accessor.

Responsibilities:
- Read the optional Principal, Probe, Session and path off a request.
- Never raise: every accessor returns None for "absent".
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from starlette.requests import Request

from authgate.auth.probe import AuthProbe, CallableProbe

PRINCIPAL_STATE_KEY = "principal"
PROBE_STATE_KEY = "auth_probe"


def get_principal(request: Request) -> Any | None:
    return getattr(request.state, PRINCIPAL_STATE_KEY, None)


def get_probe(request: Request) -> AuthProbe | None:
    # A bare callable taking the request is adapted; anything else that is
    # neither a probe nor callable counts as no probe.
    probe = getattr(request.state, PROBE_STATE_KEY, None)
    if isinstance(probe, AuthProbe):
        return probe
    if callable(probe):
        return CallableProbe(probe)
    return None


def get_session(request: Request) -> MutableMapping[str, Any] | None:
    # `request.session` asserts when SessionMiddleware is not installed.
    return request.scope.get("session")


def get_request_path(request: Request) -> str | None:
    """Path plus query string, or None when the scope carries no path."""
    path = request.scope.get("path")
    if not path:
        return None
    query = request.scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path
