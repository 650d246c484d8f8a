"""
authgate.observability.middleware

ASGI middleware binding request-scoped logging context.

Responsibilities:
- Accept or mint a request id and echo it on the response.
- Bind request id/path/method into structlog contextvars for every log line,
  including the gate's pass/deny events.
- Log one `request_completed` line carrying the final status (302 for denials).
"""

from __future__ import annotations

import uuid
from typing import Any

import structlog
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from authgate.observability.logging import get_logger

REQUEST_ID_HEADER = "x-request-id"

log = get_logger(__name__)


class RequestContextMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self._app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id
        status: dict[str, Any] = {}

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
                message.setdefault("headers", [])
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=scope.get("path", ""),
            method=scope.get("method", ""),
        )
        try:
            await self._app(scope, receive, send_with_request_id)
            log.debug("request_completed", status=status.get("code"))
        finally:
            structlog.contextvars.clear_contextvars()


# --- Module Notes -----------------------------------------------------------
# Install this outermost so the gate's deny events carry the request id.
