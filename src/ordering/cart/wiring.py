"""CartService composition from the active adapters."""

from catalogue.product_catalog import get_catalog
from identity.auth import get_authenticator
from ordering.cart.service import CartService
from ordering.cart.store import get_cart_store
from shared.settings import get_settings

_current_service: CartService | None = None


def get_cart_service() -> CartService:
    global _current_service
    if _current_service is None:
        _current_service = CartService(
            store=get_cart_store(),
            catalog=get_catalog(),
            authenticator=get_authenticator(),
            settings=get_settings(),
        )
    return _current_service


def set_cart_service(service: CartService) -> None:
    """Override the active service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_cart_service() -> None:
    global _current_service
    _current_service = None
