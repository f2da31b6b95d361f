"""Authenticator factory.

Provides get_authenticator() / set_authenticator() to swap implementations.
Defaults to a JwtAuthenticator configured from settings.
"""

from identity.auth.jwt_adapter import JwtAuthenticator
from identity.auth.port import Authenticator
from shared.settings import get_settings

_current_authenticator: Authenticator | None = None


def get_authenticator() -> Authenticator:
    """Return the active authenticator."""
    global _current_authenticator
    if _current_authenticator is None:
        settings = get_settings()
        _current_authenticator = JwtAuthenticator(
            secret=settings.jwt_secret.get_secret_value(),
            algorithm=settings.jwt_algorithm,
        )
    return _current_authenticator


def set_authenticator(authenticator: Authenticator) -> None:
    """Override the active authenticator (useful for tests)."""
    global _current_authenticator
    _current_authenticator = authenticator


def reset_authenticator() -> None:
    global _current_authenticator
    _current_authenticator = None
