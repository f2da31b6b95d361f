"""Cart pricing: resolve every line's price and reduce to one exact total.

Lookups for distinct products run concurrently inside a TaskGroup. The
first failure cancels the lookups still in flight and fails the whole
total: an unpriceable line never turns into a zero or a partial sum.
"""

import asyncio
from decimal import Decimal

import structlog

from catalogue.product_catalog.port import ProductCatalog
from ordering.cart.cart import Cart
from shared.deadlines import bounded
from shared.errors import DependencyFailure, ShopCartError

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


async def _resolve(catalog: ProductCatalog, product_id: str, timeout: float) -> Decimal:
    try:
        price = await bounded(catalog.get_price(product_id), timeout, "catalogue")
    except ShopCartError:
        raise
    except Exception as exc:
        raise DependencyFailure("catalogue", f"Price lookup failed for product {product_id}") from exc
    return price if isinstance(price, Decimal) else Decimal(str(price))


async def resolve_prices(catalog: ProductCatalog, product_ids, timeout: float) -> dict[str, Decimal]:
    """Look up each distinct product id once, concurrently; fail fast."""
    unique_ids = list(dict.fromkeys(str(pid) for pid in product_ids))
    try:
        async with asyncio.TaskGroup() as group:
            tasks = {pid: group.create_task(_resolve(catalog, pid, timeout)) for pid in unique_ids}
    except ExceptionGroup as failures:
        first = failures.exceptions[0]
        logger.warning(
            "Price resolution failed",
            error=str(first),
            failed_lookups=len(failures.exceptions),
            requested_lookups=len(unique_ids),
        )
        raise first
    return {pid: task.result() for pid, task in tasks.items()}


async def calculate_cart_total(cart: Cart, catalog: ProductCatalog, timeout: float) -> Decimal:
    prices = await resolve_prices(catalog, (item.product_id for item in cart.items), timeout)
    return sum(
        (prices[str(item.product_id)] * item.quantity for item in cart.items),
        start=ZERO,
    )
