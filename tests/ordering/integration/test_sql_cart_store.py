"""SqlCartStore against a file-backed SQLite database."""

import asyncio
import json
import time
from uuid import uuid4

import pytest
from ordering.cart.service import CartService
from ordering.cart.store.port import NewLineItem
from ordering.cart.store.sql_adapter import SqlCartStore
from shared.errors import ConcurrentUpdateConflict, DependencyFailure, DependencyTimeout
from shared.settings import Settings
from sqlalchemy.exc import OperationalError


@pytest.fixture
def sql_store(tmp_path):
    store = SqlCartStore.from_url(f"sqlite:///{tmp_path / 'carts.db'}", max_retries=5)
    store.create_schema()
    yield store
    store.drop_schema()
    store.engine.dispose()


class TestSqlCartStore:
    @pytest.mark.asyncio
    async def test_find_missing_cart(self, sql_store):
        assert await sql_store.find_by_owner("user-001") is None

    @pytest.mark.asyncio
    async def test_first_append_creates_cart(self, sql_store):
        cart = await sql_store.append_item("user-001", NewLineItem.create("prod-x", 2))

        stored = await sql_store.find_by_owner("user-001")
        assert str(stored.id) == str(cart.id)
        assert [(str(i.product_id), i.quantity) for i in stored.items] == [("prod-x", 2)]

    @pytest.mark.asyncio
    async def test_appends_accumulate_in_order(self, sql_store):
        await sql_store.append_item("user-001", NewLineItem.create("prod-x", 2))
        await sql_store.append_item("user-001", NewLineItem.create("prod-y", 1))
        await sql_store.append_item("user-001", NewLineItem.create("prod-x", 1))

        stored = await sql_store.find_by_owner("user-001")
        assert [str(i.product_id) for i in stored.items] == ["prod-x", "prod-y", "prod-x"]

    @pytest.mark.asyncio
    async def test_line_id_is_kept(self, sql_store):
        item = NewLineItem.create("prod-x", 1)
        await sql_store.append_item("user-001", item)

        stored = await sql_store.find_by_owner("user-001")
        assert str(stored.items[0].id) == item.item_id

    @pytest.mark.asyncio
    async def test_concurrent_appends_for_new_owner_lose_nothing(self, sql_store):
        await asyncio.gather(
            sql_store.append_item("user-001", NewLineItem.create("prod-x", 2)),
            sql_store.append_item("user-001", NewLineItem.create("prod-y", 1)),
        )

        stored = await sql_store.find_by_owner("user-001")
        assert {(str(i.product_id), i.quantity) for i in stored.items} == {("prod-x", 2), ("prod-y", 1)}

    @pytest.mark.asyncio
    async def test_owners_have_separate_rows(self, sql_store):
        await sql_store.append_item("alice", NewLineItem.create("prod-x", 1))
        await sql_store.append_item("bob", NewLineItem.create("prod-y", 1))

        assert (await sql_store.find_by_owner("alice")).item_count == 1
        assert str((await sql_store.find_by_owner("bob")).items[0].product_id) == "prod-y"

    @pytest.mark.asyncio
    async def test_lost_race_is_replayed(self, sql_store, monkeypatch):
        await sql_store.append_item("user-001", NewLineItem.create("prod-x", 1))

        original = sql_store._compare_and_swap
        calls = []

        def lose_first_race(owner_id, payload, seen_version):
            calls.append(seen_version)
            if len(calls) == 1:
                # Another writer commits in between
                competing = json.loads(payload)
                competing["items"][-1].update(id=str(uuid4()), product_id="prod-other")
                original(owner_id, json.dumps(competing), seen_version)
                return False
            return original(owner_id, payload, seen_version)

        monkeypatch.setattr(sql_store, "_compare_and_swap", lose_first_race)

        await sql_store.append_item("user-001", NewLineItem.create("prod-y", 1))

        stored = await sql_store.find_by_owner("user-001")
        assert calls == [1, 2]
        assert [str(i.product_id) for i in stored.items] == ["prod-x", "prod-other", "prod-y"]

    @pytest.mark.asyncio
    async def test_conflict_surfaced_after_retries(self, tmp_path, monkeypatch):
        store = SqlCartStore.from_url(f"sqlite:///{tmp_path / 'conflict.db'}", max_retries=0)
        store.create_schema()
        await store.append_item("user-001", NewLineItem.create("prod-x", 1))
        monkeypatch.setattr(store, "_compare_and_swap", lambda *args: False)

        with pytest.raises(ConcurrentUpdateConflict) as exc_info:
            await store.append_item("user-001", NewLineItem.create("prod-y", 1))

        assert exc_info.value.context["attempts"] == 1
        assert (await store.find_by_owner("user-001")).item_count == 1
        store.engine.dispose()

    @pytest.mark.asyncio
    async def test_missing_schema_is_dependency_failure(self, tmp_path):
        store = SqlCartStore.from_url(f"sqlite:///{tmp_path / 'empty.db'}")

        with pytest.raises(DependencyFailure) as exc_info:
            await store.find_by_owner("user-001")
        assert exc_info.value.dependency == "cart_store"
        store.engine.dispose()


class TestSqlStoreDeadlines:
    @pytest.fixture
    def hasty_service(self, sql_store, catalog, authenticator):
        settings = Settings(store_timeout_seconds=0.1, auth_timeout_seconds=0.5, catalog_timeout_seconds=0.5)
        return CartService(sql_store, catalog, authenticator, settings)

    @staticmethod
    def _slow_down(monkeypatch, store, name, outcome=None):
        original = getattr(store, name)

        def slow(*args):
            time.sleep(0.3)
            return original(*args) if outcome is None else outcome

        monkeypatch.setattr(store, name, slow)

    @pytest.mark.asyncio
    async def test_update_outliving_deadline_is_reported_as_written(self, hasty_service, sql_store, principal, monkeypatch):
        await hasty_service.add_to_cart(principal, "prod-x", 1)
        self._slow_down(monkeypatch, sql_store, "_compare_and_swap")

        cart = await hasty_service.add_to_cart(principal, "prod-y", 1)

        assert [str(i.product_id) for i in cart.items] == ["prod-x", "prod-y"]
        stored = await sql_store.find_by_owner("user-001")
        assert [str(i.product_id) for i in stored.items] == ["prod-x", "prod-y"]

    @pytest.mark.asyncio
    async def test_insert_outliving_deadline_is_reported_as_written(self, hasty_service, sql_store, principal, monkeypatch):
        self._slow_down(monkeypatch, sql_store, "_insert")

        cart = await hasty_service.add_to_cart(principal, "prod-x", 2)

        assert cart.item_count == 1
        assert (await sql_store.find_by_owner("user-001")).item_count == 1

    @pytest.mark.asyncio
    async def test_unwritten_append_past_deadline_fails_as_a_whole(self, hasty_service, sql_store, principal, monkeypatch):
        await hasty_service.add_to_cart(principal, "prod-x", 1)
        self._slow_down(monkeypatch, sql_store, "_compare_and_swap", outcome=False)

        with pytest.raises(DependencyTimeout) as exc_info:
            await hasty_service.add_to_cart(principal, "prod-y", 1)

        assert exc_info.value.dependency == "cart_store"
        assert [str(i.product_id) for i in (await sql_store.find_by_owner("user-001")).items] == ["prod-x"]

    @pytest.mark.asyncio
    async def test_failed_write_past_deadline_reports_the_failure(self, hasty_service, sql_store, principal, monkeypatch):
        await hasty_service.add_to_cart(principal, "prod-x", 1)

        def broken(*args):
            time.sleep(0.3)
            raise OperationalError("UPDATE shopping_carts", {}, Exception("disk I/O error"))

        monkeypatch.setattr(sql_store, "_compare_and_swap", broken)

        with pytest.raises(DependencyFailure) as exc_info:
            await hasty_service.add_to_cart(principal, "prod-y", 1)

        assert not isinstance(exc_info.value, DependencyTimeout)
        assert (await sql_store.find_by_owner("user-001")).item_count == 1
