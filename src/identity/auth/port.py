"""Authenticator port (abstract interface).

The cart core depends only on this contract, never on a token format or
signing scheme. Adapters turn a bearer credential into a ``Principal``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """Authenticated identity and role for the lifetime of one request."""

    subject_id: str
    role: Role = Role.CUSTOMER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class Authenticator(ABC):
    """Abstract credential verifier."""

    @abstractmethod
    async def verify(self, credential: str) -> Principal:
        """Return the principal for ``credential``.

        Raises ``AuthenticationFailure`` when the credential is missing,
        malformed, badly signed or expired.
        """
        ...
