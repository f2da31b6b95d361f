"""FastAPI routes for the cart: add, read, total.

The cart owner is always the authenticated principal; no route accepts a
user id from the client.
"""

from fastapi import APIRouter, Depends, Header

from identity.auth.port import Principal
from ordering.api.schemas import AddToCartRequest, CartResponse, CartTotalResponse
from ordering.cart.service import CartService
from ordering.cart.wiring import get_cart_service
from shared.errors import NotFound

cart_router = APIRouter(tags=["cart"])


def cart_service() -> CartService:
    return get_cart_service()


async def cart_principal(
    authorization: str | None = Header(default=None),
    service: CartService = Depends(cart_service),
) -> Principal:
    return await service.authenticate(authorization)


@cart_router.post("/add-to-cart", response_model=CartResponse)
async def add_to_cart(
    body: AddToCartRequest,
    principal: Principal = Depends(cart_principal),
    service: CartService = Depends(cart_service),
) -> CartResponse:
    cart = await service.add_to_cart(principal, body.product_id, body.quantity)
    return CartResponse.from_cart(cart)


@cart_router.get("/get-cart", response_model=CartResponse)
async def get_cart(
    principal: Principal = Depends(cart_principal),
    service: CartService = Depends(cart_service),
) -> CartResponse:
    cart = await service.get_cart(principal)
    if cart is None:
        raise NotFound("Cart not found")
    return CartResponse.from_cart(cart)


@cart_router.get("/calculate-total", response_model=CartTotalResponse)
async def calculate_total(
    principal: Principal = Depends(cart_principal),
    service: CartService = Depends(cart_service),
) -> CartTotalResponse:
    total = await service.calculate_total(principal)
    if total is None:
        raise NotFound("Cart not found")
    return CartTotalResponse(total=total)
