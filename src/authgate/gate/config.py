"""
authgate.gate.config

Gate configuration.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LOGIN_PATH = "/api/login"
DEFAULT_RETURN_PATH = "/"


@dataclass(frozen=True, slots=True)
class GateConfig:
    """
    Attributes:
        login_path: Where denied requests are redirected.
        default_return_path: Stored as `returnTo` when the request path is
            empty, absent or not site-relative.
    """

    login_path: str = DEFAULT_LOGIN_PATH
    default_return_path: str = DEFAULT_RETURN_PATH
