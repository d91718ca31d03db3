"""Tests for the JSON document store and the JSON repositories.

These touch the filesystem through pytest's ``tmp_path``.
"""

import json
from datetime import timedelta

import pytest

from candleshop.domain.model.cart import Cart
from candleshop.domain.model.combination import Combination
from candleshop.domain.model.option import OptionKind
from candleshop.domain.model.value_objects import Money
from candleshop.infrastructure.persistence.json_cart_repository import JsonCartRepository
from candleshop.infrastructure.persistence.json_option_repository import JsonOptionRepository
from candleshop.infrastructure.persistence.json_product_repository import JsonProductRepository
from candleshop.infrastructure.persistence.json_store import (
    JsonCollection,
    JsonDocumentStore,
    StoreClosedError,
)
from tests.fakes import JAR, LAVENDER, SAGE, sample_options, sample_products


class TestJsonDocumentStore:

    def test_write_is_flushed_immediately(self, tmp_path):
        with JsonDocumentStore(tmp_path) as store:
            store.collection("things").upsert({"id": "a", "n": 1})
            on_disk = json.loads((tmp_path / "things.json").read_text())
        assert on_disk == [{"id": "a", "n": 1}]

    def test_reads_return_copies(self, tmp_path):
        with JsonDocumentStore(tmp_path) as store:
            things = store.collection("things")
            things.upsert({"id": "a", "tags": []})
            things.get("a")["tags"].append("x")
            assert things.get("a") == {"id": "a", "tags": []}

    def test_transaction_commits_on_success(self, tmp_path):
        with JsonDocumentStore(tmp_path) as store:
            things = store.collection("things")
            with store.transaction():
                things.upsert({"id": "a"})
                assert json.loads((tmp_path / "things.json").read_text()) == []
            assert json.loads((tmp_path / "things.json").read_text()) == [{"id": "a"}]

    def test_transaction_rolls_back_on_error(self, tmp_path):
        with JsonDocumentStore(tmp_path) as store:
            things = store.collection("things")
            things.upsert({"id": "keep"})
            with pytest.raises(RuntimeError):
                with store.transaction():
                    things.upsert({"id": "new"})
                    things.delete("keep")
                    raise RuntimeError("boom")
            assert things.get("new") is None
            assert things.get("keep") == {"id": "keep"}
        assert json.loads((tmp_path / "things.json").read_text()) == [{"id": "keep"}]

    def test_nested_transactions_join_the_outer_one(self, tmp_path):
        with JsonDocumentStore(tmp_path) as store:
            things = store.collection("things")
            with pytest.raises(ValueError):
                with store.transaction():
                    with store.transaction():
                        things.upsert({"id": "inner"})
                    raise ValueError("outer fails")
            assert things.get("inner") is None

    @pytest.mark.parametrize("step", ["write_staged", "publish_staged"])
    def test_failed_commit_leaves_memory_and_disk_untouched(self, tmp_path, monkeypatch, step):
        with JsonDocumentStore(tmp_path) as store:
            carts = store.collection("carts")
            carts.upsert({"id": "c1", "items": ["jar"]})
            orders = store.collection("orders")

            original = getattr(JsonCollection, step)

            def fail_for_orders(collection):
                if collection.name == "orders":
                    raise OSError("disk full")
                original(collection)

            monkeypatch.setattr(JsonCollection, step, fail_for_orders)
            with pytest.raises(OSError):
                with store.transaction():
                    orders.upsert({"id": "o1"})
                    carts.upsert({"id": "c1", "items": []})
            monkeypatch.undo()

            assert orders.get("o1") is None
            assert carts.get("c1") == {"id": "c1", "items": ["jar"]}

        assert json.loads((tmp_path / "carts.json").read_text()) == [{"id": "c1", "items": ["jar"]}]
        assert json.loads((tmp_path / "orders.json").read_text()) == []
        assert list(tmp_path.glob("*.tmp")) == []

    def test_collection_first_used_inside_failed_commit_is_restored(self, tmp_path, monkeypatch):
        with JsonDocumentStore(tmp_path) as store:
            store.collection("orders")
            original = JsonCollection.publish_staged

            def fail_for_orders(collection):
                if collection.name == "orders":
                    raise OSError("disk full")
                original(collection)

            monkeypatch.setattr(JsonCollection, "publish_staged", fail_for_orders)
            with pytest.raises(OSError):
                with store.transaction():
                    store.collection("carts").upsert({"id": "c1"})
                    store.collection("orders").upsert({"id": "o1"})
            monkeypatch.undo()

            assert store.collection("carts").get("c1") is None
        assert json.loads((tmp_path / "carts.json").read_text()) == []

    def test_closed_store_refuses_work(self, tmp_path):
        store = JsonDocumentStore(tmp_path)
        with pytest.raises(StoreClosedError):
            store.collection("things")
        with store:
            things = store.collection("things")
        with pytest.raises(StoreClosedError):
            things.get("a")

    def test_documents_need_ids(self, tmp_path):
        with JsonDocumentStore(tmp_path) as store:
            with pytest.raises(ValueError):
                store.collection("things").upsert({"name": "x"})


class TestJsonRepositories:

    def test_catalog_survives_reopen(self, tmp_path):
        with JsonDocumentStore(tmp_path) as store:
            options = JsonOptionRepository(store)
            products = JsonProductRepository(store)
            for o in sample_options():
                options.save(o)
            for p in sample_products():
                products.save(p)

        with JsonDocumentStore(tmp_path) as store:
            options = JsonOptionRepository(store)
            products = JsonProductRepository(store)
            jar = products.get_by_id(JAR)
            assert jar.base_price == Money.of("15.99")
            assert jar.low_stock_threshold == 5
            assert jar.scent_ids[0] == LAVENDER
            assert products.get_by_name("classic jar").id == JAR
            assert [p.name for p in products.list_all()] == ["Classic Jar", "Pillar", "Travel Tin"]
            assert options.get(OptionKind.COLOR, SAGE).name == "Sage"
            assert options.get(OptionKind.SCENT, SAGE) is None

    def test_cart_round_trip_and_expiry(self, tmp_path):
        with JsonDocumentStore(tmp_path) as store:
            carts = JsonCartRepository(store)
            cart = Cart.for_guest("g1")
            cart.add_item(JAR, 2, Combination(scent_id=LAVENDER), Money.of("17.99"))
            carts.save(cart)

            loaded = carts.get_by_guest("g1")
            assert loaded.items[0].combination == Combination(scent_id=LAVENDER)
            assert loaded.total_price == Money.of("35.98")
            assert carts.get_by_user("g1") is None

            stale = Cart.for_user("u1")
            stale.expires_at = stale.created_at - timedelta(seconds=1)
            carts.save(stale)
            assert carts.get_by_user("u1") is None
            assert carts.delete_expired(stale.created_at) == 1
            assert carts.get_by_id(cart.id) is not None
