"""User store and account service factories.

Provides get_user_store() / set_user_store() to swap implementations.
Defaults to an empty InMemoryUserStore.
"""

from identity.auth import get_authenticator
from identity.users.accounts import AccountService
from identity.users.memory_adapter import InMemoryUserStore
from identity.users.port import UserStore
from shared.settings import get_settings

_current_store: UserStore | None = None
_current_service: AccountService | None = None


def get_user_store() -> UserStore:
    global _current_store
    if _current_store is None:
        _current_store = InMemoryUserStore()
    return _current_store


def set_user_store(store: UserStore) -> None:
    """Override the active user store (useful for tests)."""
    global _current_store, _current_service
    _current_store = store
    _current_service = None


def get_account_service() -> AccountService:
    global _current_service
    if _current_service is None:
        _current_service = AccountService(get_user_store(), get_authenticator(), get_settings())
    return _current_service


def reset_user_store() -> None:
    global _current_store, _current_service
    _current_store = None
    _current_service = None
