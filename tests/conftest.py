"""
tests.conftest

Shared fixtures for gate tests.

Responsibilities:
- Build Starlette requests with chosen principal/probe/session/path.
- Provide a recording continuation for middleware tests.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from authgate.gate.identity import PRINCIPAL_STATE_KEY, PROBE_STATE_KEY

_UNSET: Any = object()


def make_request(
    *,
    path: str | None = "/",
    query: bytes = b"",
    principal: Any = None,
    probe: Any = None,
    session: Any = _UNSET,
) -> Request:
    state: dict[str, Any] = {}
    if principal is not None:
        state[PRINCIPAL_STATE_KEY] = principal
    if probe is not None:
        state[PROBE_STATE_KEY] = probe
    scope: dict[str, Any] = {
        "type": "http",
        "method": "GET",
        "headers": [],
        "query_string": query,
        "state": state,
    }
    if path is not None:
        scope["path"] = path
    if session is not _UNSET:
        scope["session"] = session
    return Request(scope)


class RecordingNext:
    def __init__(self) -> None:
        self.calls: list[Request] = []

    async def __call__(self, request: Request) -> Response:
        self.calls.append(request)
        return PlainTextResponse("ok")


@pytest.fixture
def request_factory() -> Callable[..., Request]:
    return make_request


@pytest.fixture
def call_next() -> RecordingNext:
    return RecordingNext()
