"""
authgate.gate.predicate

Authentication predicate.

Responsibilities:
- Decide whether a request is authenticated from an attached probe (authoritative)
  or, failing that, from the presence of a principal.
- Fail closed: any probe failure resolves to False and is never re-raised.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any

from starlette.requests import Request

from authgate.auth.probe import AuthProbe
from authgate.gate.errors import ProbeFailure
from authgate.gate.identity import get_principal, get_probe
from authgate.observability.logging import get_logger

log = get_logger(__name__)

DEFAULT_PROBE_TIMEOUT = 5.0


def _require_bool(result: Any) -> bool:
    if isinstance(result, bool):
        return result
    raise ProbeFailure(f"probe returned {type(result).__name__}, expected bool")


def _probe_failed(probe: AuthProbe, exc: Exception) -> bool:
    log.warning(
        "auth_probe_failed",
        probe=type(probe).__name__,
        error=repr(exc),
    )
    return False


def is_authenticated(request: Request) -> bool:
    """Synchronous predicate. Awaitable probe results count as failures here."""
    probe = get_probe(request)
    if probe is None:
        return get_principal(request) is not None

    try:
        result = probe.is_authenticated(request)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise ProbeFailure("probe returned an awaitable; use is_authenticated_async")
        return _require_bool(result)
    except Exception as e:
        return _probe_failed(probe, e)


async def is_authenticated_async(
    request: Request, *, timeout: float = DEFAULT_PROBE_TIMEOUT
) -> bool:
    """
    Same contract as `is_authenticated`, but suspends on probes that return an
    awaitable. Exceeding `timeout` is a probe failure.
    """
    probe = get_probe(request)
    if probe is None:
        return get_principal(request) is not None

    try:
        result = probe.is_authenticated(request)
        if inspect.isawaitable(result):
            result = await asyncio.wait_for(result, timeout)
        return _require_bool(result)
    except Exception as e:
        return _probe_failed(probe, e)


# --- Module Notes -----------------------------------------------------------
# CancelledError is a BaseException and is left to propagate: a cancelled
# request produces no response at all rather than a pass.
