"""Shared pytest fixtures for cart, storage and public API tests."""
from __future__ import annotations

from decimal import Decimal

import pytest

from scanplate.core.cart_storage import CartStore
from scanplate.core.kv_storage import MemoryKeyValueStore
from scanplate.domain.menu import MenuItem


@pytest.fixture()
def storage() -> MemoryKeyValueStore:
    """In-memory storage slot standing in for the browser/Redis slot."""
    return MemoryKeyValueStore()


@pytest.fixture()
def cart(storage: MemoryKeyValueStore) -> CartStore:
    return CartStore(storage)


@pytest.fixture()
def burger() -> MenuItem:
    return MenuItem.model_validate(
        {
            "_id": "burger-1",
            "name": "Burger",
            "price": 8.00,
            "category": "Mains",
            "imageUrl": "https://cdn.example/burger.jpg",
            "components": ["bun", "patty", "onion", "pickles"],
            "extras": [
                {"name": "Cheese", "price": 1.00},
                {"name": "Bacon", "price": 2.50},
            ],
        }
    )


@pytest.fixture()
def salad() -> MenuItem:
    return MenuItem(id="salad-7", name="Salad", price=Decimal("6.50"), components=("lettuce", "tomato"))


@pytest.fixture()
async def api_server():
    """Start aiohttp test servers on demand and close them afterwards."""
    servers: list[object] = []

    async def _start(app):
        from aiohttp.test_utils import TestServer

        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return server

    try:
        yield _start
    finally:
        for server in servers:
            await server.close()
