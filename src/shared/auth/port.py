"""Identity gate port (abstract interface).

Resolves a bearer credential to the identity acting on a request. Adapters
let the application swap between a token registry for development and tests
and a JWT verifier in deployed environments.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    CUSTOMER = "customer"
    OPERATOR = "operator"


@dataclass(frozen=True)
class Identity:
    """An authenticated caller."""

    id: str
    role: Role
    name: str | None = None

    @property
    def is_operator(self) -> bool:
        return self.role == Role.OPERATOR


class AuthError(Exception):
    """Base class for identity and role failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.messages = {"authorization": [message]}


class Unauthenticated(AuthError):
    """The credential is missing, malformed, expired, or unknown."""


class Forbidden(AuthError):
    """The caller is authenticated but lacks the required role."""


class IdentityGate(ABC):
    """Abstract identity gate interface."""

    @abstractmethod
    def authenticate(self, token: str) -> Identity:
        """Return the identity for `token` or raise `Unauthenticated`."""
        ...
