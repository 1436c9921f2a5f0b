"""Tests for the key-value record stores."""

from __future__ import annotations

import pytest

from skillflow.storage import MemoryRecordStore, RecordStore, SqlRecordStore


@pytest.fixture(params=["sql", "memory"])
def any_store(request: pytest.FixtureRequest) -> RecordStore:
    if request.param == "sql":
        return request.getfixturevalue("store")
    return MemoryRecordStore()


def test_get_missing_key_returns_none(any_store: RecordStore) -> None:
    assert any_store.get("missing") is None
    assert any_store.get_raw("missing") is None


def test_set_then_get_returns_decoded_document(any_store: RecordStore) -> None:
    any_store.set("doc", {"name": "Python", "tags": [1, 2]})
    assert any_store.get("doc") == {"name": "Python", "tags": [1, 2]}


def test_last_write_wins(any_store: RecordStore) -> None:
    any_store.set("doc", [1])
    any_store.set("doc", [2])
    assert any_store.get("doc") == [2]


def test_remove_deletes_key_and_ignores_missing(any_store: RecordStore) -> None:
    any_store.set("doc", {"a": 1})
    any_store.remove("doc")
    any_store.remove("never-existed")
    assert any_store.get("doc") is None
    assert "doc" not in any_store.keys()


def test_corrupt_document_reads_as_none(any_store: RecordStore) -> None:
    any_store.set_raw("doc", "{not json")
    assert any_store.get("doc") is None


def test_unserializable_value_is_not_written(any_store: RecordStore) -> None:
    any_store.set("doc", {"ok": True})
    any_store.set("doc", {"bad": object()})
    assert any_store.get("doc") == {"ok": True}


def test_raw_items_lists_every_key(any_store: RecordStore) -> None:
    any_store.set("a", 1)
    any_store.set("b", "two")
    items = any_store.raw_items()
    assert items == {"a": "1", "b": '"two"'}
    assert sorted(any_store.keys()) == ["a", "b"]


def test_sql_store_persists_across_instances(store: SqlRecordStore) -> None:
    store.set("shared", {"value": 42})
    assert SqlRecordStore().get("shared") == {"value": 42}
