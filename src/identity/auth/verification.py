"""Credential verification bounded by a deadline."""

from identity.auth.port import Authenticator, Principal
from shared.deadlines import bounded
from shared.errors import AuthenticationFailure


async def authenticate(authenticator: Authenticator, credential: str | None, timeout: float) -> Principal:
    if not credential or not credential.strip():
        raise AuthenticationFailure("Access denied: no credential supplied")
    return await bounded(authenticator.verify(credential), timeout, "authenticator")
