"""
authgate.auth.models

Auth domain models.

Responsibilities:
- Define the identity type (`Principal`) that upstream adapters attach to requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Caller identity as attached by an upstream identity adapter.

    The gate treats this as opaque and only checks presence; handlers behind
    the gate may read it.
    """

    subject: str
    roles: frozenset[str] = field(default_factory=frozenset)
