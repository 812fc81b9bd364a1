"""Fake identity gate: token registry for testing and development."""

from shared.auth.port import Identity, IdentityGate, Role, Unauthenticated


class FakeIdentityGate(IdentityGate):
    """Resolves tokens registered ahead of time."""

    def __init__(self):
        self._tokens: dict[str, Identity] = {}

    def register(self, token: str, user_id: str, role: Role | str = Role.CUSTOMER, name: str | None = None) -> Identity:
        """Register a token for an identity (useful for tests)."""
        identity = Identity(id=user_id, role=Role(role), name=name)
        self._tokens[token] = identity
        return identity

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)

    def authenticate(self, token: str) -> Identity:
        identity = self._tokens.get(token)
        if identity is None:
            raise Unauthenticated("Invalid token")
        return identity
