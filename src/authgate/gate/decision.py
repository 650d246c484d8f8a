"""
authgate.gate.decision

Pass/deny decision and its side effects, kept apart.

Responsibilities:
- `decide`: pure mapping from (authenticated, path, config) to a `GateDecision`.
- `apply_session_writes`: the only place the gate mutates a session.
- `resolve_return_to`: the login flow's counterpart, reading `returnTo` back.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any

from authgate.gate.config import DEFAULT_RETURN_PATH, GateConfig
from authgate.gate.errors import SessionUnavailable

RETURN_TO_KEY = "returnTo"


class Outcome(str, enum.Enum):
    PASS = "pass"
    DENY = "deny"


@dataclass(frozen=True, slots=True)
class GateDecision:
    outcome: Outcome
    redirect_to: str | None = None
    session_writes: Mapping[str, str] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASS


def is_site_relative(path: str) -> bool:
    # "//host" and backslash variants are treated by browsers as off-site.
    return path.startswith("/") and not path.startswith("//") and "\\" not in path


def effective_return_path(path: str | None, default: str = DEFAULT_RETURN_PATH) -> str:
    if not path or not is_site_relative(path):
        return default
    return path


def decide(*, authenticated: bool, path: str | None, config: GateConfig) -> GateDecision:
    if authenticated:
        return GateDecision(outcome=Outcome.PASS)
    return GateDecision(
        outcome=Outcome.DENY,
        redirect_to=config.login_path,
        session_writes={RETURN_TO_KEY: effective_return_path(path, config.default_return_path)},
    )


def apply_session_writes(
    session: MutableMapping[str, Any] | None, writes: Mapping[str, str]
) -> None:
    if not writes:
        return
    if session is None:
        raise SessionUnavailable("no session attached to request")
    for key, value in writes.items():
        session[key] = value


def resolve_return_to(
    session: MutableMapping[str, Any] | None, default: str = DEFAULT_RETURN_PATH
) -> str:
    """
    Pop `returnTo` from the session for a post-login redirect.

    Falls back to `default` when there is no session, no stored value, or the
    stored value is not a site-relative path.
    """
    if session is None:
        return default
    value = session.pop(RETURN_TO_KEY, None)
    if isinstance(value, str) and is_site_relative(value):
        return value
    return default
