"""CartService: authorised cart mutation, reads and totals.

Every operation is bound to the principal's ``subject_id``; a client never
names the cart it acts on. Cart writes and price lookups are separate calls,
so a slow catalogue never holds up a cart write. Each collaborator call is
bounded by its configured timeout.
"""

from decimal import Decimal

import structlog

from catalogue.product_catalog.port import ProductCatalog
from identity.auth.port import Authenticator, Principal
from identity.auth.verification import authenticate
from ordering.cart.cart import Cart
from ordering.cart.pricing import calculate_cart_total
from ordering.cart.store.port import CartStore, NewLineItem
from shared.deadlines import bounded
from shared.errors import AuthenticationFailure
from shared.settings import Settings, get_settings

logger = structlog.get_logger(__name__)


class CartService:
    def __init__(
        self,
        store: CartStore,
        catalog: ProductCatalog,
        authenticator: Authenticator,
        settings: Settings | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.authenticator = authenticator
        self.settings = settings or get_settings()

    async def authenticate(self, credential: str | None) -> Principal:
        """Verify a bearer credential and return its principal."""
        return await authenticate(self.authenticator, credential, self.settings.auth_timeout_seconds)

    @staticmethod
    def _owner_of(principal: Principal | None) -> str:
        if not isinstance(principal, Principal) or not principal.subject_id:
            raise AuthenticationFailure("Access denied: no valid principal")
        return str(principal.subject_id)

    async def add_to_cart(self, principal: Principal, product_id, quantity) -> Cart:
        """Append a line item to the principal's cart, opening it if needed.

        Product existence is not checked here; an unknown product fails the
        total, not the addition. Writes are never retried after an ambiguous
        failure, since a replay could add the item twice. A store write that
        outlives the deadline is still reported as written.
        """
        owner_id = self._owner_of(principal)
        item = NewLineItem.create(product_id, quantity)

        cart = await bounded(
            self.store.append_item(owner_id, item),
            self.settings.store_timeout_seconds,
            "cart_store",
        )
        logger.info(
            "Item added to cart",
            owner_id=owner_id,
            cart_id=str(cart.id),
            item_id=item.item_id,
            product_id=item.product_id,
            quantity=item.quantity,
            item_count=cart.item_count,
        )
        return cart

    async def get_cart(self, principal: Principal) -> Cart | None:
        """Return the principal's cart, or None if they never added anything."""
        owner_id = self._owner_of(principal)
        return await bounded(
            self.store.find_by_owner(owner_id),
            self.settings.store_timeout_seconds,
            "cart_store",
        )

    async def calculate_total(self, principal: Principal) -> Decimal | None:
        """Sum price × quantity over the principal's cart.

        Returns None when the principal has no cart. Fails as a whole if any
        line's product cannot be priced.
        """
        cart = await self.get_cart(principal)
        if cart is None:
            return None

        total = await calculate_cart_total(cart, self.catalog, self.settings.catalog_timeout_seconds)
        logger.info(
            "Cart total calculated",
            owner_id=str(cart.owner_id),
            cart_id=str(cart.id),
            item_count=cart.item_count,
            total=str(total),
        )
        return total
