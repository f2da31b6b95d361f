import os
from pathlib import Path

import pytest

os.environ.setdefault("ENVIRONMENT", "test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def reset_adapters():
    """Drop any adapter a test installed so the next test starts clean."""
    yield

    from catalogue.product_catalog import reset_catalog
    from identity.auth import reset_authenticator
    from identity.users import reset_user_store
    from ordering.cart.store import reset_cart_store
    from ordering.cart.wiring import reset_cart_service

    reset_cart_service()
    reset_cart_store()
    reset_catalog()
    reset_authenticator()
    reset_user_store()
