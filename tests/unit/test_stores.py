"""Tests for the key-value stores (memory and JSON files)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from trading_journal.core.errors import StoreError
from trading_journal.core.interfaces import IKeyValueStore
from trading_journal.storage.json_store import JsonFileStore
from trading_journal.storage.memory_store import MemoryStore


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path: Path) -> IKeyValueStore:
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(tmp_path / "data")


class TestKeyValueContract:
    def test_satisfies_protocol(self, store):
        assert isinstance(store, IKeyValueStore)

    def test_missing_key_is_none(self, store):
        assert store.get("trading-journal-trades") is None

    def test_put_then_get(self, store):
        store.put("k", [{"a": 1, "b": "x"}])
        assert store.get("k") == [{"a": 1, "b": "x"}]

    def test_put_replaces_whole_value(self, store):
        store.put("k", {"a": 1, "b": 2})
        store.put("k", {"c": 3})
        assert store.get("k") == {"c": 3}

    def test_returned_values_are_copies(self, store):
        store.put("k", [1, 2])
        value = store.get("k")
        value.append(3)
        assert store.get("k") == [1, 2]

    def test_delete(self, store):
        store.put("k", 1)
        store.delete("k")
        assert store.get("k") is None
        store.delete("k")  # no error when absent


class TestJsonFileStore:
    def test_one_file_per_key(self, tmp_path: Path):
        store = JsonFileStore(tmp_path)
        store.put("trading-journal-trades", [])
        assert json.loads((tmp_path / "trading-journal-trades.json").read_text()) == []

    def test_corrupt_file_raises(self, tmp_path: Path):
        (tmp_path / "k.json").write_text("{not json")
        with pytest.raises(StoreError, match="Corrupt JSON"):
            JsonFileStore(tmp_path).get("k")

    @pytest.mark.parametrize("key", ["../escape", "a/b", ""])
    def test_rejects_unsafe_keys(self, tmp_path: Path, key):
        with pytest.raises(StoreError, match="Invalid store key"):
            JsonFileStore(tmp_path).put(key, 1)

    def test_unserializable_value(self, tmp_path: Path):
        with pytest.raises(StoreError, match="not JSON-serializable"):
            JsonFileStore(tmp_path).put("k", object())

