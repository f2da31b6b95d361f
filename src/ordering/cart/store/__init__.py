"""Cart store factory.

Provides get_cart_store() / set_cart_store() to swap implementations:
- InMemoryCartStore for development and testing (``CART_STORE=memory``)
- SqlCartStore for a relational database (``CART_STORE=sql``)
"""

from ordering.cart.store.memory_adapter import InMemoryCartStore
from ordering.cart.store.port import CartStore
from ordering.cart.store.sql_adapter import SqlCartStore
from shared.settings import get_settings

_current_store: CartStore | None = None


def get_cart_store() -> CartStore:
    """Return the active cart store, building it from settings on first use."""
    global _current_store
    if _current_store is None:
        settings = get_settings()
        if settings.cart_store == "sql":
            store = SqlCartStore.from_url(settings.database_url, max_retries=settings.append_max_retries)
            store.create_schema()
            _current_store = store
        else:
            _current_store = InMemoryCartStore()
    return _current_store


def set_cart_store(store: CartStore) -> None:
    """Override the active cart store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_cart_store() -> None:
    global _current_store
    _current_store = None
