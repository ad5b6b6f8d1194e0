from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from scanplate.core.cart_storage import CartStore
from scanplate.core.constants import CART_EXPIRY_SECONDS
from scanplate.integrations.redis_slot import RedisKeyValueStore


@dataclass
class FakeRedisClient:
    data: dict[str, str] = field(default_factory=dict)
    expiry: dict[str, int] = field(default_factory=dict)
    setex_calls: list[tuple[str, int]] = field(default_factory=list)
    broken: bool = False

    def ping(self) -> bool:
        return True

    def get(self, key: str):
        if self.broken:
            raise ConnectionError("redis down")
        return self.data.get(key)

    def setex(self, key: str, ttl: int, value: str) -> bool:
        if self.broken:
            raise ConnectionError("redis down")
        self.data[key] = value
        self.expiry[key] = ttl
        self.setex_calls.append((key, ttl))
        return True

    def delete(self, key: str) -> int:
        if self.broken:
            raise ConnectionError("redis down")
        existed = 1 if key in self.data else 0
        self.data.pop(key, None)
        self.expiry.pop(key, None)
        return existed


@pytest.fixture
def fake_redis(monkeypatch):
    import scanplate.integrations.redis_slot as redis_slot_module

    client = FakeRedisClient()
    monkeypatch.setattr(redis_slot_module.redis, "from_url", lambda *args, **kwargs: client)
    return client


def test_redis_cart_is_shared_between_instances(fake_redis, burger) -> None:
    cart_a = CartStore(RedisKeyValueStore(redis_url="redis://fake"))
    cart_a.add_item(burger, ["bun"], [burger.find_extra("Cheese")], quantity=2)

    cart_b = CartStore(RedisKeyValueStore(redis_url="redis://fake"))

    assert cart_b.snapshot() == cart_a.snapshot()
    assert "scanplate:scanPlateCart" in fake_redis.data


def test_redis_refreshes_ttl_on_changes(fake_redis, burger) -> None:
    cart = CartStore(RedisKeyValueStore(redis_url="redis://fake"))

    line = cart.add_item(burger, [], [], quantity=1)
    calls_before = len(fake_redis.setex_calls)
    assert fake_redis.expiry["scanplate:scanPlateCart"] == CART_EXPIRY_SECONDS

    cart.change_quantity(line.configuration_key, 2)
    assert len(fake_redis.setex_calls) == calls_before + 1


def test_redis_errors_fall_back_to_memory(fake_redis, burger, caplog) -> None:
    slot = RedisKeyValueStore(redis_url="redis://fake")
    cart = CartStore(slot)
    fake_redis.broken = True

    cart.add_item(burger, [], [], quantity=2)

    assert slot.is_fallback
    assert slot.get("scanPlateCart") is not None
    assert cart.snapshot().total_item_count == 2
    assert "fallback to memory" in caplog.text


def test_unreachable_redis_starts_in_memory(monkeypatch) -> None:
    import scanplate.integrations.redis_slot as redis_slot_module

    def _refuse(*args, **kwargs):
        raise ConnectionError("refused")

    monkeypatch.setattr(redis_slot_module.redis, "from_url", _refuse)
    slot = RedisKeyValueStore(redis_url="redis://nowhere")

    slot.set("k", "v")
    assert slot.is_fallback
    assert slot.get("k") == "v"


def test_missing_url_uses_memory(monkeypatch) -> None:
    monkeypatch.delenv("REDIS_URL", raising=False)
    slot = RedisKeyValueStore()

    assert slot.is_fallback
