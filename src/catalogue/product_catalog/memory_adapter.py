"""Configurable in-memory product catalogue for development and testing.

Behaves like a remote catalogue without any external calls. It can be
switched unavailable or slowed down at runtime, which makes catalogue
outages and slow lookups reproducible in tests.
"""

import asyncio
from decimal import Decimal, InvalidOperation
from uuid import uuid4

from protean.exceptions import ValidationError

from catalogue.product_catalog.port import Product, ProductCatalog
from shared.errors import DependencyFailure, ProductNotFound


def to_price(value) -> Decimal:
    """Coerce ``value`` to a non-negative Decimal price."""
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError({"price": [f"'{value}' is not a valid price"]}) from exc
    if not price.is_finite() or price < 0:
        raise ValidationError({"price": ["Price must be a non-negative amount"]})
    return price


class InMemoryCatalog(ProductCatalog):
    def __init__(self, products: list[Product] | None = None) -> None:
        self._products: dict[str, Product] = {p.id: p for p in products or []}
        self.available: bool = True
        self.latency: dict[str, float] = {}
        self.default_latency: float = 0.0
        self.lookups: list[str] = []
        self.cancelled: list[str] = []

    def configure(
        self,
        available: bool = True,
        latency: dict[str, float] | None = None,
        default_latency: float = 0.0,
    ) -> None:
        """Configure catalogue behavior at runtime."""
        self.available = available
        self.latency = dict(latency or {})
        self.default_latency = default_latency

    async def get_price(self, product_id: str) -> Decimal:
        product_id = str(product_id)
        self.lookups.append(product_id)

        delay = self.latency.get(product_id, self.default_latency)
        try:
            if delay:
                await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled.append(product_id)
            raise

        if not self.available:
            raise DependencyFailure("catalogue", "Catalogue is unavailable")

        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product.price

    async def list_products(self) -> list[Product]:
        if not self.available:
            raise DependencyFailure("catalogue", "Catalogue is unavailable")
        return list(self._products.values())

    async def add_product(
        self,
        name: str,
        price: Decimal,
        description: str | None = None,
        images: tuple[str, ...] = (),
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError({"name": ["Product name is required"]})

        product = Product(
            id=str(uuid4()),
            name=name.strip(),
            price=to_price(price),
            description=description,
            images=tuple(images),
        )
        self._products[product.id] = product
        return product

    def remove_product(self, product_id: str) -> None:
        """Drop a product, as a catalogue deletion would."""
        self._products.pop(str(product_id), None)
