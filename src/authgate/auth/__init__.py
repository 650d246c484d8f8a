"""
authgate.auth

Identity-provider side of the gate.

Responsibilities:
- The `Principal` model attached to requests by upstream adapters.
- The `AuthProbe` capability interface consumed by the predicate.
- Example upstream adapters (JWT bearer, session flag).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package decides pass/deny; that lives in `authgate.gate`.
