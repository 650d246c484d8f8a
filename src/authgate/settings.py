"""
authgate.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the gate and the service shell.
- Hide secrets from repr/logging (session signing key, JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `AUTHGATE_`).
    Defaults are safe for local dev; prod must override the secrets.
    """

    model_config = SettingsConfigDict(env_prefix="AUTHGATE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "authgate"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Gate
    login_path: str = "/api/login"
    default_return_path: str = "/"
    protected_prefixes: list[str] = Field(default_factory=lambda: ["/app"])

    # Which upstream identity strategy is wired in front of the gate.
    identity_mode: Literal["bearer", "session"] = "bearer"

    # Session store (signed cookie)
    session_secret: str = Field(default="dev-session-secret-change-me", repr=False)
    session_cookie: str = "authgate_session"

    # Bearer adapter
    jwt_alg: str = "HS256"
    jwt_issuer: str = "authgate"
    jwt_audience: str = "authgate-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Gate options are deliberately limited to login path and default return path;
# everything else here configures the collaborators around the gate.
