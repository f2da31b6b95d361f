from decimal import Decimal

import pytest


@pytest.fixture
def catalog():
    from catalogue.product_catalog.memory_adapter import InMemoryCatalog
    from catalogue.product_catalog.port import Product

    return InMemoryCatalog([Product(id="prod-001", name="Classic Tee", price=Decimal("19.99"))])


@pytest.fixture
def admin():
    from identity.auth.port import Principal, Role

    return Principal(subject_id="admin-001", role=Role.ADMIN)


@pytest.fixture
def customer():
    from identity.auth.port import Principal, Role

    return Principal(subject_id="user-001", role=Role.CUSTOMER)
