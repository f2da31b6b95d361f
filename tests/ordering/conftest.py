from decimal import Decimal

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.cart.cart import Cart, CartLineItem  # noqa: F401
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture
def settings():
    from shared.settings import Settings

    return Settings(
        auth_timeout_seconds=0.5,
        catalog_timeout_seconds=0.5,
        store_timeout_seconds=0.5,
    )


@pytest.fixture
def catalog():
    from catalogue.product_catalog.memory_adapter import InMemoryCatalog
    from catalogue.product_catalog.port import Product

    return InMemoryCatalog(
        [
            Product(id="prod-x", name="Widget", price=Decimal("10.00")),
            Product(id="prod-y", name="Gadget", price=Decimal("5.00")),
            Product(id="prod-z", name="Gizmo", price=Decimal("0.10")),
        ]
    )


@pytest.fixture
def store():
    from ordering.cart.store.memory_adapter import InMemoryCartStore

    return InMemoryCartStore()


@pytest.fixture
def authenticator():
    from identity.auth.jwt_adapter import JwtAuthenticator

    return JwtAuthenticator(secret="test-secret-0123456789abcdef-0123456789")


@pytest.fixture
def service(store, catalog, authenticator, settings):
    from ordering.cart.service import CartService

    return CartService(store=store, catalog=catalog, authenticator=authenticator, settings=settings)


@pytest.fixture
def principal():
    from identity.auth.port import Principal, Role

    return Principal(subject_id="user-001", role=Role.CUSTOMER)
