"""In-memory user store for development and testing."""

from identity.users.port import UserAccount, UserStore
from shared.errors import UsernameTaken


class InMemoryUserStore(UserStore):
    def __init__(self) -> None:
        self._accounts: dict[str, UserAccount] = {}

    async def find_by_username(self, username: str) -> UserAccount | None:
        return self._accounts.get(username)

    async def add(self, account: UserAccount) -> UserAccount:
        # No await between the check and the insert, so two registrations
        # of one username cannot both pass.
        if account.username in self._accounts:
            raise UsernameTaken(account.username)
        self._accounts[account.username] = account
        return account

    def __len__(self) -> int:
        return len(self._accounts)
