"""
authgate.gate.factory

Gate factory.
"""

from __future__ import annotations

from authgate.gate.config import GateConfig
from authgate.gate.middleware import AuthGate
from authgate.settings import Settings


def build_gate(config: GateConfig | None = None) -> AuthGate:
    return AuthGate(config or GateConfig())


def gate_config_from_settings(settings: Settings) -> GateConfig:
    return GateConfig(
        login_path=settings.login_path,
        default_return_path=settings.default_return_path,
    )
