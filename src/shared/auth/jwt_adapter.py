"""JWT identity gate: verifies HS256 bearer tokens.

Tokens carry the caller id in `id` (or `sub`), an optional `role` claim
(`customer` when absent) and an optional display `name`.
"""

import os

import structlog
from jose import JWTError, jwt

from shared.auth.port import Identity, IdentityGate, Role, Unauthenticated

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"


class JwtIdentityGate(IdentityGate):
    def __init__(self, secret_key: str | None = None, algorithm: str = ALGORITHM):
        self.secret_key = secret_key or os.environ.get("JWT_SECRET", "change-this-secret")
        self.algorithm = algorithm

    def authenticate(self, token: str) -> Identity:
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.info("Rejected bearer token", reason=str(exc))
            raise Unauthenticated("Invalid token") from exc

        user_id = claims.get("id") or claims.get("sub")
        if not user_id:
            raise Unauthenticated("Token does not identify a user")

        try:
            role = Role(claims.get("role", Role.CUSTOMER.value))
        except ValueError as exc:
            raise Unauthenticated("Token carries an unknown role") from exc

        return Identity(id=str(user_id), role=role, name=claims.get("name"))

    def issue(self, user_id: str, role: Role | str = Role.CUSTOMER, name: str | None = None, **claims) -> str:
        """Sign a token for an identity (development and tests)."""
        payload = {"id": str(user_id), "role": Role(role).value, **claims}
        if name:
            payload["name"] = name
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
