"""Cart store port (abstract interface).

Adapters must guarantee:
- concurrent ``append_item`` calls for the same owner never lose an update;
- calls for different owners never wait on each other;
- readers see either the state before or after an append, never a partial
  item list.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from uuid import uuid4

from ordering.cart.cart import Cart, validate_line


@dataclass(frozen=True)
class NewLineItem:
    """A line item on its way into a cart.

    The id is fixed up front so that a store which re-applies the append
    after losing a version race writes the same line, not a second one.
    """

    product_id: str
    quantity: int
    item_id: str = field(default_factory=lambda: str(uuid4()))

    @classmethod
    def create(cls, product_id, quantity):
        validate_line(product_id, quantity)
        return cls(product_id=str(product_id), quantity=quantity)


class CartStore(ABC):
    """Durable per-user cart records."""

    @abstractmethod
    async def find_by_owner(self, owner_id: str) -> Cart | None:
        """Return the owner's cart, or None if it was never created."""
        ...

    @abstractmethod
    async def append_item(self, owner_id: str, item: NewLineItem) -> Cart:
        """Append ``item`` to the owner's cart, creating the cart if absent.

        Either the item is durably appended and the updated cart returned,
        or the call raises and nothing was written. A write that has already
        been issued is awaited even if the caller is cancelled, and its
        outcome is reported.
        """
        ...
