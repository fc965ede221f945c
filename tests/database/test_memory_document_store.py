from __future__ import annotations

import pytest

from src.cleaning_tracker.cleaning_tracker.core.exceptions import NotFoundError
from src.cleaning_tracker.cleaning_tracker.database.document_store import SERVER_TIMESTAMP


def test_insert_assigns_id_and_server_timestamp(store, fixed_now):
    doc_id = store.insert("things", {"name": "a", "createdAt": SERVER_TIMESTAMP})

    doc = store.get_by_id("things", doc_id)
    assert doc["id"] == doc_id
    assert doc["name"] == "a"
    assert doc["createdAt"] > fixed_now


def test_get_all_filters_are_anded_and_ordered(store):
    store.insert("things", {"kind": "x", "owner": "a", "n": 1})
    store.insert("things", {"kind": "x", "owner": "b", "n": 2})
    store.insert("things", {"kind": "x", "owner": "a", "n": 3})
    store.insert("things", {"kind": "y", "owner": "a", "n": 4})

    docs = store.get_all("things", order_by="n", descending=True, filters={"kind": "x", "owner": "a"})

    assert [d["n"] for d in docs] == [3, 1]


def test_documents_missing_order_field_go_last(store):
    store.insert("things", {"n": 1})
    store.insert("things", {})
    store.insert("things", {"n": 2})

    docs = store.get_all("things", order_by="n", descending=True)

    assert [d.get("n") for d in docs] == [2, 1, None]


def test_update_merges_and_missing_document_raises(store):
    doc_id = store.insert("things", {"a": 1, "b": 2})
    store.update_by_id("things", doc_id, {"b": 3})

    assert store.get_by_id("things", doc_id) == {"id": doc_id, "a": 1, "b": 3}
    with pytest.raises(NotFoundError):
        store.update_by_id("things", "missing", {"b": 3})


def test_returned_documents_are_copies(store):
    doc_id = store.insert("things", {"tags": ["a"]})
    doc = store.get_by_id("things", doc_id)
    doc["tags"].append("b")

    assert store.get_by_id("things", doc_id)["tags"] == ["a"]


def test_delete_reports_whether_document_existed(store):
    doc_id = store.insert("things", {})

    assert store.delete_by_id("things", doc_id) is True
    assert store.delete_by_id("things", doc_id) is False
    assert store.get_by_id("things", doc_id) is None
