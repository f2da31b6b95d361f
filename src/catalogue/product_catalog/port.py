"""Product catalogue port (abstract interface).

The cart core only needs ``get_price``; listing and adding products serve
the storefront and the admin surface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: Decimal
    description: str | None = None
    images: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "description": self.description,
            "images": list(self.images),
        }


class ProductCatalog(ABC):
    """Abstract product catalogue."""

    @abstractmethod
    async def get_price(self, product_id: str) -> Decimal:
        """Resolve a product's current price.

        Raises ``ProductNotFound`` for unknown ids and ``DependencyFailure``
        when the catalogue cannot be reached.
        """
        ...

    @abstractmethod
    async def list_products(self) -> list[Product]: ...

    @abstractmethod
    async def add_product(
        self,
        name: str,
        price: Decimal,
        description: str | None = None,
        images: tuple[str, ...] = (),
    ) -> Product: ...
