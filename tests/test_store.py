"""
Tests for the KVStore

These tests verify the basic KVStore operations:
- set(): Insert or update key-value pairs
- get(): Retrieve values by key
- delete(): Remove key-value pairs
- exists(), size(), clear(), snapshot()

Run with: python -m pytest tests/test_store.py -v
"""

from kvlog.store.kv_store import KVStore


class TestKVStoreSet:
    """Test set() method."""

    def test_set_new_key(self, store: KVStore):
        store.set("key1", "value1")
        assert store.size() == 1
        assert store.get("key1") == "value1"

    def test_set_update_existing_key(self, store: KVStore):
        store.set("key1", "value1")
        store.set("key1", "value2")

        assert store.get("key1") == "value2"
        assert store.size() == 1  # Size should not increase

    def test_set_multiple_keys(self, store: KVStore):
        store.set("key1", "value1")
        store.set("key2", "value2")
        store.set("key3", "value3")

        assert store.size() == 3
        assert store.get("key2") == "value2"


class TestKVStoreGetDelete:
    """Test get() and delete() methods."""

    def test_get_nonexistent_key(self, store: KVStore):
        assert store.get("nonexistent") is None

    def test_delete_existing_key(self, store: KVStore):
        store.set("key", "value")
        assert store.delete("key") is True
        assert store.get("key") is None
        assert not store.exists("key")

    def test_delete_nonexistent_key(self, store: KVStore):
        assert store.delete("missing") is False
        assert store.size() == 0

    def test_delete_twice(self, store: KVStore):
        store.set("key", "value")
        assert store.delete("key") is True
        assert store.delete("key") is False


class TestKVStoreUtilities:
    """Test size(), clear(), snapshot() and stats."""

    def test_clear_returns_removed_count(self, store: KVStore):
        for i in range(5):
            store.set(f"key{i}", f"value{i}")

        assert store.clear() == 5
        assert store.size() == 0
        assert store.get("key0") is None

    def test_clear_empty_store(self, store: KVStore):
        assert store.clear() == 0

    def test_snapshot_is_a_copy(self, store: KVStore):
        store.set("a", "1")
        snapshot = store.snapshot()
        snapshot["b"] = "2"

        assert snapshot == {"a": "1", "b": "2"}
        assert not store.exists("b")

    def test_len_and_contains(self, store: KVStore):
        store.set("a", "1")
        assert len(store) == 1
        assert "a" in store
        assert "b" not in store

    def test_get_stats(self, store: KVStore):
        store.set("a", "abc")
        store.set("b", "de")

        stats = store.get_stats()
        assert stats["total_keys"] == 2
        assert stats["total_value_bytes"] == 5
