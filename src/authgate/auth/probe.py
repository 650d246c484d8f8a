"""
authgate.auth.probe

Authentication probe capability.

Responsibilities:
- Define `AuthProbe`, the pull-style "is this request authenticated" interface.
- Provide small probe implementations for session-backed and callable checks.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from starlette.requests import Request

SESSION_AUTH_FLAG = "authenticated"


@runtime_checkable
class AuthProbe(Protocol):
    """
    Capability attached to a request by an identity adapter.

    When present its answer is authoritative: it overrides whatever
    `Principal` may also be attached.
    """

    def is_authenticated(self, request: Request) -> bool | Awaitable[bool]:
        """Return True if `request` is authenticated.

        Sync gates require a plain `bool`; the async predicate also accepts an
        awaitable resolving to one. Anything else counts as a failure.
        """
        ...


class SessionFlagProbe:
    """Authenticated iff the session carries `flag_key` set to exactly True."""

    def __init__(self, flag_key: str = SESSION_AUTH_FLAG) -> None:
        self._flag_key = flag_key

    def is_authenticated(self, request: Request) -> bool:
        # request.session asserts when no SessionMiddleware is installed; the
        # predicate turns that into a fail-closed result.
        return request.session.get(self._flag_key) is True


class CallableProbe:
    """Adapts a plain callable taking the request to the `AuthProbe` interface."""

    def __init__(self, fn: Callable[[Request], bool | Awaitable[bool]]) -> None:
        self._fn = fn

    def is_authenticated(self, request: Request) -> bool | Awaitable[bool]:
        return self._fn(request)


# --- Module Notes -----------------------------------------------------------
# Probes are attached under `request.state.auth_probe` (see `auth.middleware`).
