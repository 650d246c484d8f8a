"""
authgate.gate.errors

Internal gate error kinds. None of these ever escape the gate; they exist so the
places that swallow them can be precise about what they swallow.
"""

from __future__ import annotations


class GateError(Exception):
    pass


class SessionUnavailable(GateError):
    """A session write was attempted on a request without a session."""


class ProbeFailure(GateError):
    """An attached probe raised, timed out, or returned something other than a bool."""
