"""Account registration and login.

Both return a signed bearer token for the account. Login answers an
unknown username and a wrong password with the same failure.
"""

from uuid import uuid4

import structlog
from protean.exceptions import ValidationError

from identity.auth.jwt_adapter import JwtAuthenticator
from identity.auth.port import Role
from identity.users.passwords import hash_password, verify_password
from identity.users.port import UserAccount, UserStore
from shared.deadlines import bounded
from shared.errors import AuthenticationFailure
from shared.settings import Settings, get_settings

logger = structlog.get_logger(__name__)

LOGIN_FAILED = "Invalid username or password"


def validate_username(username) -> str:
    if not isinstance(username, str) or not username.strip():
        raise ValidationError({"username": ["Username is required"]})
    if any(ch.isspace() for ch in username):
        raise ValidationError({"username": ["Username must not contain whitespace"]})
    return username


class AccountService:
    def __init__(self, store: UserStore, issuer: JwtAuthenticator, settings: Settings | None = None) -> None:
        self.store = store
        self.issuer = issuer
        self.settings = settings or get_settings()
        self._dummy_hash: str | None = None

    def _issue(self, account: UserAccount) -> str:
        return self.issuer.issue_token(account.id, account.role, ttl_seconds=self.settings.token_ttl_seconds)

    async def _find(self, username: str) -> UserAccount | None:
        return await bounded(self.store.find_by_username(username), self.settings.store_timeout_seconds, "user_store")

    async def register(self, username, password, role: Role = Role.CUSTOMER) -> str:
        username = validate_username(username)
        password_hash = await hash_password(password, rounds=self.settings.password_hash_rounds)

        account = UserAccount(id=str(uuid4()), username=username, password_hash=password_hash, role=role)
        await bounded(self.store.add(account), self.settings.store_timeout_seconds, "user_store")

        logger.info("Account registered", user_id=account.id, username=username, role=role.value)
        return self._issue(account)

    async def login(self, username, password) -> str:
        account = await self._find(username) if isinstance(username, str) else None

        if account is None:
            # An unknown username costs one hash check, like a wrong password.
            await verify_password(str(password), await self._dummy())
            logger.info("Login rejected", reason="unknown_user")
            raise AuthenticationFailure(LOGIN_FAILED)

        if not await verify_password(password, account.password_hash):
            logger.info("Login rejected", reason="bad_password", user_id=account.id)
            raise AuthenticationFailure(LOGIN_FAILED)

        logger.info("Login succeeded", user_id=account.id)
        return self._issue(account)

    async def _dummy(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await hash_password(uuid4().hex, rounds=self.settings.password_hash_rounds)
        return self._dummy_hash
