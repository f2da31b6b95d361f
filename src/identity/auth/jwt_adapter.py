"""JWT authenticator backed by PyJWT.

Tokens carry ``sub`` (the subject id) and ``role``. The Authorization header
may hold the bare token or ``Bearer <token>``.
"""

from datetime import UTC, datetime, timedelta

import jwt
import structlog

from identity.auth.port import Authenticator, Principal, Role
from shared.errors import AuthenticationFailure

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "bearer "


def strip_scheme(credential: str) -> str:
    credential = credential.strip()
    if credential.lower().startswith(BEARER_PREFIX):
        return credential[len(BEARER_PREFIX) :].strip()
    return credential


class JwtAuthenticator(Authenticator):
    def __init__(self, secret: str, algorithm: str = "HS256", leeway: int = 0) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.leeway = leeway

    def issue_token(self, subject_id: str, role: Role = Role.CUSTOMER, ttl_seconds: int = 3600) -> str:
        """Sign a token for ``subject_id`` valid for ``ttl_seconds``."""
        now = datetime.now(UTC)
        claims = {
            "sub": str(subject_id),
            "role": role.value,
            "iat": now,
            "exp": now + timedelta(seconds=ttl_seconds),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    async def verify(self, credential: str) -> Principal:
        if not credential or not strip_scheme(credential):
            raise AuthenticationFailure("Access denied: no credential supplied")

        token = strip_scheme(credential)
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationFailure("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected credential", reason=str(exc))
            raise AuthenticationFailure("Invalid token") from exc

        try:
            role = Role(claims.get("role"))
        except ValueError as exc:
            raise AuthenticationFailure("Invalid token: unknown role") from exc

        return Principal(subject_id=str(claims["sub"]), role=role)
