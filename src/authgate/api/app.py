"""
authgate.api.app

FastAPI app factory for the gate service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Compose the upstream identity adapter, the session store and the gate in the
  order the gate depends on.
"""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from authgate import __version__
from authgate.api.routers.dev_auth import router as dev_auth_router
from authgate.api.routers.health import router as health_router
from authgate.api.routers.login import build_login_router
from authgate.api.routers.protected import app_router, me_router
from authgate.auth.jwt import JwtConfig
from authgate.auth.middleware import BearerPrincipalMiddleware, ProbeMiddleware
from authgate.auth.probe import SessionFlagProbe
from authgate.gate.factory import build_gate, gate_config_from_settings
from authgate.gate.middleware import AuthGateMiddleware
from authgate.observability.logging import configure_logging, get_logger
from authgate.observability.middleware import RequestContextMiddleware
from authgate.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        env=settings.env,
        json_logs=settings.env != "dev",
    )

    app = FastAPI(
        title="Auth Gate",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    gate = build_gate(gate_config_from_settings(settings))
    app.state.settings = settings
    app.state.gate = gate

    # add_middleware prepends, so the last one added runs first:
    # request context -> session -> identity adapter -> gate -> routes.
    app.add_middleware(
        AuthGateMiddleware,
        gate=gate,
        protected_prefixes=settings.protected_prefixes,
    )
    if settings.identity_mode == "session":
        app.add_middleware(ProbeMiddleware, probe=SessionFlagProbe())
    else:
        app.add_middleware(
            BearerPrincipalMiddleware,
            jwt_config=JwtConfig(
                alg=settings.jwt_alg,
                issuer=settings.jwt_issuer,
                audience=settings.jwt_audience,
                secret=settings.jwt_secret,
            ),
        )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        https_only=settings.env == "prod",
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(build_login_router(settings.login_path))
    app.include_router(app_router)
    app.include_router(me_router)

    log.info(
        "app_created",
        env=settings.env,
        identity_mode=settings.identity_mode,
        login_path=gate.config.login_path,
    )
    return app


# --- Module Notes -----------------------------------------------------------
# The gate only reads what the layers above it attach; swapping the identity
# adapter never requires touching the gate.
