"""FastAPI dependencies that authenticate bearer credentials."""

from fastapi import Depends, Header

from shared.auth import get_identity_gate
from shared.auth.port import Forbidden, Identity, Unauthenticated


def current_identity(authorization: str | None = Header(default=None)) -> Identity:
    if not authorization:
        raise Unauthenticated("No token provided")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Invalid token format")

    return get_identity_gate().authenticate(token.strip())


def current_operator(identity: Identity = Depends(current_identity)) -> Identity:
    if not identity.is_operator:
        raise Forbidden("Operator access required")
    return identity
