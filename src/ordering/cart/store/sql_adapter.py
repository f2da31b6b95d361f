"""Relational cart store using optimistic concurrency.

Each owner has one row ``(owner_id, payload, version)``. An append reads the
row, applies the item on the aggregate and writes it back with either an
INSERT (first item; ``owner_id`` is the primary key) or an
``UPDATE ... WHERE version = <version read>``. Losing the race shows up as
an IntegrityError or zero updated rows; in both cases nothing was written,
so the append is replayed against the fresh row, up to ``max_retries``
times.

Database calls are blocking and run in worker threads. No lock is held
between the read and the write. A worker thread cannot be stopped once it
has started a write, so a cancelled append still waits for the write and
reports what it did: the updated cart when the row was written, the
cancellation when it was not.
"""

import asyncio
import json

import structlog
from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ordering.cart.cart import Cart
from ordering.cart.store.port import CartStore, NewLineItem
from shared.errors import ConcurrentUpdateConflict, DependencyFailure

logger = structlog.get_logger(__name__)

metadata = MetaData()

carts_table = Table(
    "shopping_carts",
    metadata,
    Column("owner_id", String(255), primary_key=True),
    Column("payload", Text, nullable=False),
    Column("version", Integer, nullable=False),
)


def build_engine(database_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args)


class SqlCartStore(CartStore):
    def __init__(self, engine: Engine, max_retries: int = 3) -> None:
        self.engine = engine
        self.max_retries = max_retries

    @classmethod
    def from_url(cls, database_url: str, max_retries: int = 3) -> "SqlCartStore":
        return cls(build_engine(database_url), max_retries=max_retries)

    def create_schema(self) -> None:
        metadata.create_all(self.engine)

    def drop_schema(self) -> None:
        metadata.drop_all(self.engine)

    # -------------------------------------------------------------------
    # Blocking row operations (run in worker threads)
    # -------------------------------------------------------------------
    def _fetch(self, owner_id: str):
        with self.engine.connect() as conn:
            return conn.execute(
                select(carts_table.c.payload, carts_table.c.version).where(carts_table.c.owner_id == owner_id)
            ).first()

    def _insert(self, owner_id: str, payload: str) -> bool:
        try:
            with self.engine.begin() as conn:
                conn.execute(insert(carts_table).values(owner_id=owner_id, payload=payload, version=1))
        except IntegrityError:
            return False
        return True

    def _compare_and_swap(self, owner_id: str, payload: str, seen_version: int) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(
                update(carts_table)
                .where(carts_table.c.owner_id == owner_id, carts_table.c.version == seen_version)
                .values(payload=payload, version=seen_version + 1)
            )
        return result.rowcount == 1

    async def _write(self, operation, *args) -> bool:
        """Run a blocking write to completion, even if the caller is cancelled."""
        write = asyncio.ensure_future(asyncio.to_thread(operation, *args))
        interrupted = None
        while not write.done():
            try:
                await asyncio.shield(write)
            except asyncio.CancelledError as exc:
                interrupted = exc

        written = write.result()
        if interrupted is not None:
            if not written:
                raise interrupted
            logger.warning("Cart write completed after cancellation", operation=operation.__name__)
        return written

    # -------------------------------------------------------------------
    # CartStore
    # -------------------------------------------------------------------
    async def find_by_owner(self, owner_id: str) -> Cart | None:
        try:
            row = await asyncio.to_thread(self._fetch, str(owner_id))
        except SQLAlchemyError as exc:
            raise DependencyFailure("cart_store", "Could not read cart") from exc

        if row is None:
            return None
        return Cart.from_record(json.loads(row.payload))

    async def append_item(self, owner_id: str, item: NewLineItem) -> Cart:
        owner_id = str(owner_id)

        for attempt in range(self.max_retries + 1):
            try:
                row = await asyncio.to_thread(self._fetch, owner_id)
                if row is None:
                    cart = Cart.open(owner_id)
                else:
                    cart = Cart.from_record(json.loads(row.payload))
                cart.add_item(item.product_id, item.quantity, item_id=item.item_id)
                payload = json.dumps(cart.to_record())

                if row is None:
                    written = await self._write(self._insert, owner_id, payload)
                else:
                    written = await self._write(self._compare_and_swap, owner_id, payload, row.version)
            except SQLAlchemyError as exc:
                raise DependencyFailure("cart_store", "Could not write cart") from exc

            if written:
                return cart

            logger.info("Cart version conflict", owner_id=owner_id, attempt=attempt + 1)

        raise ConcurrentUpdateConflict(
            "cart_store",
            "Cart was modified concurrently; retry the request",
            owner_id=owner_id,
            attempts=self.max_retries + 1,
        )
