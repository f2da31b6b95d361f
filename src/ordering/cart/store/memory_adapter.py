"""In-process cart store for development and testing.

Appends for one owner are serialised by that owner's lock; owners never
share a lock. Each committed cart is kept as an immutable versioned row,
so reads take no lock and always rebuild a whole cart from one snapshot.
"""

import asyncio
import json
import weakref
from dataclasses import dataclass

import structlog

from ordering.cart.cart import Cart
from ordering.cart.store.port import CartStore, NewLineItem

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _CartRow:
    version: int
    payload: str


class InMemoryCartStore(CartStore):
    def __init__(self, write_latency: float = 0.0) -> None:
        self._rows: dict[str, _CartRow] = {}
        # A lock lives only while an append holds or awaits it.
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()
        # Pause between reading and writing a row; widens the race window in tests.
        self.write_latency = write_latency

    def _lock_for(self, owner_id: str) -> asyncio.Lock:
        lock = self._locks.get(owner_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[owner_id] = lock
        return lock

    async def find_by_owner(self, owner_id: str) -> Cart | None:
        row = self._rows.get(str(owner_id))
        if row is None:
            return None
        return Cart.from_record(json.loads(row.payload))

    async def append_item(self, owner_id: str, item: NewLineItem) -> Cart:
        owner_id = str(owner_id)
        lock = self._lock_for(owner_id)
        async with lock:
            row = self._rows.get(owner_id)
            cart = Cart.open(owner_id) if row is None else Cart.from_record(json.loads(row.payload))

            if self.write_latency:
                await asyncio.sleep(self.write_latency)

            cart.add_item(item.product_id, item.quantity, item_id=item.item_id)
            version = 1 if row is None else row.version + 1
            self._rows[owner_id] = _CartRow(version=version, payload=json.dumps(cart.to_record()))

        logger.debug("Cart row written", owner_id=owner_id, version=version)
        return cart

    def version_of(self, owner_id: str) -> int | None:
        row = self._rows.get(str(owner_id))
        return row.version if row else None
