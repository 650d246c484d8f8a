"""
authgate.gate

The authentication gate.

Responsibilities:
- Read identity signals off a request (identity accessor).
- Decide authenticated/not (predicate).
- Pass to the next handler or deny with a login redirect (middleware/dependency).
- Bind configuration into a gate instance (factory).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Typical wiring:
#   gate = build_gate(GateConfig(login_path="/api/login"))
#   app.add_middleware(AuthGateMiddleware, gate=gate, protected_prefixes=["/app"])
#   router = APIRouter(dependencies=[Depends(gate)])
