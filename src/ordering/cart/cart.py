"""Cart aggregate: one append-only cart per user.

A cart is opened lazily by the first add-to-cart call of its owner and only
ever grows: each addition appends a new line item, even when the product is
already in the cart. Quantities are never merged and no line is edited or
removed. Prices are not stored; they are resolved from the catalogue when a
total is computed.
"""

from datetime import UTC, datetime
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, Reference
from protean.utils.reflection import declared_fields

from ordering.domain import ordering


def validate_line(product_id, quantity) -> None:
    """Reject a line item before it reaches the store."""
    errors = {}
    if product_id is None or not str(product_id).strip():
        errors["product_id"] = ["Product id is required"]
    elif any(ch.isspace() for ch in str(product_id)):
        errors["product_id"] = [f"'{product_id}' is not a valid product id"]

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        errors["quantity"] = ["Quantity must be a whole number"]
    elif quantity <= 0:
        errors["quantity"] = ["Quantity must be positive"]

    if errors:
        raise ValidationError(errors)


def _restore(entity_cls, data: dict) -> dict:
    """Constructor arguments for ``entity_cls`` from its ``to_dict()`` form."""
    values = {
        name: data[name]
        for name, field in declared_fields(entity_cls).items()
        if name in data and not name.startswith("_") and not isinstance(field, (HasMany, Reference))
    }
    values["id"] = data["id"]
    return values


@ordering.entity(part_of="Cart")
class CartLineItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime(required=True)


@ordering.aggregate
class Cart:
    owner_id = Identifier(required=True, unique=True)
    items = HasMany(CartLineItem)
    created_at = DateTime(required=True)
    updated_at = DateTime(required=True)

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, owner_id):
        """Start an empty cart for ``owner_id``."""
        now = datetime.now(UTC)
        return cls(
            id=str(uuid4()),
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_record(cls, record):
        """Rebuild a cart from the payload ``to_record`` produced."""
        cart = cls(**_restore(cls, record))
        for line in record.get("items", []):
            cart.add_items(CartLineItem(**_restore(CartLineItem, line)))
        return cart

    def to_record(self) -> dict:
        return self.to_dict()

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, item_id=None):
        """Append a new line item. Never merges with an existing line."""
        validate_line(product_id, quantity)

        now = datetime.now(UTC)
        item = CartLineItem(
            id=item_id or str(uuid4()),
            product_id=str(product_id),
            quantity=quantity,
            added_at=now,
        )
        self.add_items(item)
        self.updated_at = now
        return item

    @property
    def item_count(self) -> int:
        return len(self.items)
