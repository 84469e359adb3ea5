"""Pytest configuration and fixtures"""
import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.cart import CartStore, get_cart_store
from storefront.routes import register_api_routes
from storefront.storage import MemoryStorage


@pytest.fixture
def storage():
    """Empty in-memory storage"""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Cart store over the in-memory storage"""
    return CartStore(storage)


@pytest.fixture
def seed(storage):
    """Write a raw cart record, as another page would"""
    def _seed(records):
        storage.set_item("cart", records if isinstance(records, str) else json.dumps(records))
    return _seed


@pytest.fixture
def stored_cart(storage):
    """Read back the raw persisted record"""
    def _read():
        raw = storage.get_item("cart")
        return json.loads(raw) if raw else None
    return _read


@pytest.fixture
def client(store):
    """Test client with the shared store swapped for the in-memory one"""
    app = FastAPI()
    register_api_routes(app)
    app.dependency_overrides[get_cart_store] = lambda: store
    return TestClient(app)
