from __future__ import annotations

from scanplate.core.kv_storage import JsonFileKeyValueStore, MemoryKeyValueStore


def test_memory_store_basic_operations() -> None:
    store = MemoryKeyValueStore()
    assert store.get("a") is None

    store.set("a", "1")
    assert store.get("a") == "1"

    store.delete("a")
    store.delete("a")
    assert store.get("a") is None


def test_file_store_keeps_slots_separate(tmp_path) -> None:
    path = tmp_path / "slots.json"
    store = JsonFileKeyValueStore(path)

    store.set("cart", "[]")
    store.set("customerName", "Ann")
    store.delete("cart")

    fresh = JsonFileKeyValueStore(path)
    assert fresh.get("cart") is None
    assert fresh.get("customerName") == "Ann"


def test_file_store_ignores_unreadable_file(tmp_path) -> None:
    path = tmp_path / "slots.json"
    path.write_text("{oops", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    assert store.get("cart") is None

    store.set("cart", "[]")
    assert store.get("cart") == "[]"


def test_file_store_leaves_no_temp_files(tmp_path) -> None:
    store = JsonFileKeyValueStore(tmp_path / "slots.json")
    for idx in range(5):
        store.set("cart", str(idx))

    assert [p.name for p in tmp_path.iterdir()] == ["slots.json"]
