"""User store port (abstract interface).

Accounts are looked up by username at login. The account id is what a
token names as its subject and what owns a cart.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from identity.auth.port import Role


@dataclass(frozen=True)
class UserAccount:
    id: str
    username: str
    password_hash: str
    role: Role = Role.CUSTOMER


class UserStore(ABC):
    """Abstract account storage."""

    @abstractmethod
    async def find_by_username(self, username: str) -> UserAccount | None: ...

    @abstractmethod
    async def add(self, account: UserAccount) -> UserAccount:
        """Store a new account.

        Raises ``UsernameTaken`` when the username is already registered.
        """
        ...
