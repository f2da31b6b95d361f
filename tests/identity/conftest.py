import pytest


@pytest.fixture
def secret():
    return "identity-test-secret-0123456789abcdef"


@pytest.fixture
def authenticator(secret):
    from identity.auth.jwt_adapter import JwtAuthenticator

    return JwtAuthenticator(secret=secret)


@pytest.fixture
def fast_settings():
    from shared.settings import Settings

    return Settings(password_hash_rounds=4)


@pytest.fixture
def user_store():
    from identity.users.memory_adapter import InMemoryUserStore

    return InMemoryUserStore()


@pytest.fixture
def accounts(user_store, authenticator, fast_settings):
    from identity.users.accounts import AccountService

    return AccountService(user_store, authenticator, fast_settings)
