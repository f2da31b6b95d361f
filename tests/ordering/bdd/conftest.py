"""Shared BDD fixtures and step definitions for the Ordering domain."""

import asyncio
from decimal import Decimal

import pytest
from catalogue.product_catalog.memory_adapter import InMemoryCatalog
from catalogue.product_catalog.port import Product
from identity.auth.port import Principal
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def run():
    """Drive coroutines from synchronous step functions on one loop."""
    loop = asyncio.new_event_loop()
    yield loop.run_until_complete
    loop.close()


@pytest.fixture()
def catalog():
    return InMemoryCatalog()


@pytest.fixture()
def outcome():
    """Container for the last result or captured failure."""
    return {"result": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue lists "{product_id}" at "{price}"'))
def catalogue_lists(catalog, product_id, price):
    catalog._products[product_id] = Product(id=product_id, name=product_id, price=Decimal(price))


@given("the catalogue is unavailable")
def catalogue_unavailable(catalog):
    catalog.configure(available=False)


@given(parsers.cfparse('a signed-in shopper "{subject_id}"'), target_fixture="shopper")
def signed_in_shopper(subject_id):
    return Principal(subject_id=subject_id)


@given(parsers.cfparse('the shopper added {qty:d} of "{product_id}"'))
def shopper_added(run, service, shopper, qty, product_id):
    run(service.add_to_cart(shopper, product_id, qty))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the request fails with a validation error")
def fails_with_validation_error(outcome):
    assert isinstance(outcome["exc"], ValidationError), f"Expected a validation error, got {outcome['exc']!r}"


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_one_line(run, service, shopper, count):
    assert run(service.get_cart(shopper)).item_count == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(run, service, shopper, count):
    assert run(service.get_cart(shopper)).item_count == count

