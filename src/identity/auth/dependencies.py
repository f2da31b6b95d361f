"""FastAPI dependency resolving the caller's principal."""

from fastapi import Header

from identity.auth import get_authenticator
from identity.auth.port import Principal
from identity.auth.verification import authenticate
from shared.settings import get_settings


async def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    """Verify the Authorization header; 401 when absent or invalid."""
    return await authenticate(get_authenticator(), authorization, get_settings().auth_timeout_seconds)
