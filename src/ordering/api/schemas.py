"""Pydantic request/response schemas for the cart API.

These are external contracts, separate from the Cart aggregate. Field
names follow the storefront's camelCase on input.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictInt, StrictStr

from ordering.cart.cart import Cart


# Catalogue ids arrive as strings or as serial integers; both are kept as text.
ProductId = Annotated[StrictStr | StrictInt, AfterValidator(str)]


class AddToCartRequest(BaseModel):
    product_id: ProductId = Field(alias="productId")
    quantity: StrictInt = Field(ge=1)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"productId": "prod-001", "quantity": 2}]},
    )


class CartItemResponse(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    added_at: datetime


class CartResponse(BaseModel):
    cart_id: str
    owner_id: str
    items: list[CartItemResponse]
    item_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartResponse":
        return cls(
            cart_id=str(cart.id),
            owner_id=str(cart.owner_id),
            items=[
                CartItemResponse(
                    item_id=str(item.id),
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    added_at=item.added_at,
                )
                for item in cart.items
            ],
            item_count=cart.item_count,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )


class CartTotalResponse(BaseModel):
    total: Decimal
