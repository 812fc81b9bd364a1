"""Identity gate factory.

Provides get_identity_gate() / set_identity_gate() to swap implementations:
- FakeIdentityGate for development and testing
- JwtIdentityGate for deployed environments

Select with the IDENTITY_GATE environment variable ("fake" or "jwt").
"""

import os

from shared.auth.port import IdentityGate

_current_gate: IdentityGate | None = None


def get_identity_gate() -> IdentityGate:
    """Return the configured identity gate (singleton)."""
    global _current_gate
    if _current_gate is None:
        adapter = os.environ.get("IDENTITY_GATE", "fake")
        if adapter == "fake":
            from shared.auth.fake_adapter import FakeIdentityGate

            _current_gate = FakeIdentityGate()
        elif adapter == "jwt":
            from shared.auth.jwt_adapter import JwtIdentityGate

            _current_gate = JwtIdentityGate()
        else:
            raise ValueError(f"Unknown identity gate: {adapter}")
    return _current_gate


def set_identity_gate(gate: IdentityGate) -> None:
    """Override the active identity gate (useful for tests)."""
    global _current_gate
    _current_gate = gate


def reset_identity_gate() -> None:
    """Reset to the environment-selected gate."""
    global _current_gate
    _current_gate = None
