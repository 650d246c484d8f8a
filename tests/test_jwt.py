"""
tests.test_jwt

Bearer adapter token helpers.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from authgate.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    issue_token,
    principal_from_claims,
)
from authgate.auth.models import Principal

CFG = JwtConfig(alg="HS256", issuer="authgate", audience="authgate-api", secret="s3cret")


def test_issue_then_validate_maps_to_principal() -> None:
    token = issue_token(cfg=CFG, subject="u1", roles=["admin", "viewer"])
    principal = principal_from_claims(decode_and_validate(cfg=CFG, token=token))
    assert principal == Principal(subject="u1", roles=frozenset({"admin", "viewer"}))


def test_wrong_secret_is_rejected() -> None:
    token = issue_token(cfg=CFG, subject="u1", roles=[])
    other = JwtConfig(alg="HS256", issuer="authgate", audience="authgate-api", secret="other")
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=other, token=token)


def test_expired_token_is_rejected() -> None:
    token = issue_token(cfg=CFG, subject="u1", roles=[], ttl=timedelta(seconds=-60))
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)


@pytest.mark.parametrize("payload", [{"sub": ""}, {"sub": "u1", "roles": "admin"}])
def test_malformed_claims_are_rejected(payload) -> None:
    with pytest.raises(JwtValidationError):
        principal_from_claims(payload)
