"""Tests for storage adapters"""
import json

import pytest

from storefront.cart import CartLine, CartStore
from storefront.storage import JsonFileStorage, MemoryStorage, StorageError


def test_memory_storage():
    storage = MemoryStorage({"cart": "[]"})
    assert storage.get_item("cart") == "[]"
    assert storage.get_item("missing") is None
    storage.set_item("cart", "[1]")
    assert storage.get_item("cart") == "[1]"


def test_file_storage_missing_file(tmp_path):
    assert JsonFileStorage(tmp_path / "store.json").get_item("cart") is None


def test_file_storage_write_and_read(tmp_path):
    path = tmp_path / "nested" / "store.json"
    storage = JsonFileStorage(path)
    storage.set_item("cart", "[]")
    storage.set_item("other", "x")

    assert storage.get_item("cart") == "[]"
    assert json.loads(path.read_text(encoding="utf-8")) == {"cart": "[]", "other": "x"}
    assert [p.name for p in path.parent.iterdir()] == ["store.json"]


def test_file_storage_corrupted_file_raises_on_read(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonFileStorage(path).get_item("cart")


def test_file_storage_write_replaces_corrupted_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2", encoding="utf-8")
    storage = JsonFileStorage(path)
    storage.set_item("cart", "[]")
    assert storage.get_item("cart") == "[]"


def test_file_storage_raw_json_record(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"cart": [{"key": "casio", "qty": 2}]}), encoding="utf-8")
    cart = CartStore(JsonFileStorage(path)).load()
    assert cart == [CartLine("casio", "Item", 0, 2)]


def test_two_stores_share_one_file(tmp_path):
    """Product page writes, cart page reads the same record."""
    path = tmp_path / "store.json"
    product_page = CartStore(JsonFileStorage(path))
    cart_page = CartStore(JsonFileStorage(path))

    product_page.save(product_page.add_or_merge(product_page.load(), "casio", "Casio Classic", 55000))
    assert cart_page.load() == [CartLine("casio", "Casio Classic", 55000, 1)]


def test_corrupted_file_loads_as_empty_cart(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("garbage", encoding="utf-8")
    assert CartStore(JsonFileStorage(path)).load() == []


def test_unwritable_location_does_not_raise(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = CartStore(JsonFileStorage(blocker / "store.json"))
    assert store.save([CartLine("casio", "Casio Classic", 55000, 1)]) is False
