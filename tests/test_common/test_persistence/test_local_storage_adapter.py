"""Tests for the JSON file storage adapter."""

import json

import pytest

from src.common.exceptions.custom_exceptions import StorageError
from src.common.persistence.local_storage_adapter import LocalStorageAdapter
from src.common.persistence.storage_adapter import WriteOperation


def test_open_creates_file_with_fixed_keys(tmp_path) -> None:
    path = tmp_path / "store.json"

    with LocalStorageAdapter(str(path)):
        pass

    assert json.loads(path.read_text(encoding="utf-8")) == {"inventory_products": [], "inventory_sales": []}


def test_insert_assigns_id_and_persists(local_storage) -> None:
    record = local_storage.insert("products", {"name": "Scarf", "stock": 3})

    assert record["id"]
    reopened = LocalStorageAdapter(local_storage.file_path)
    reopened.open()
    assert reopened.load("products") == [record]


def test_insert_keeps_given_id(local_storage) -> None:
    record = local_storage.insert("sales", {"id": "s-1", "quantity": 2})

    assert record["id"] == "s-1"
    assert local_storage.get("sales", "s-1") == {"id": "s-1", "quantity": 2}


def test_update_merges_and_unknown_id_returns_none(local_storage) -> None:
    record = local_storage.insert("products", {"name": "Scarf", "stock": 3})

    updated = local_storage.update("products", record["id"], {"stock": 1})

    assert updated == {"id": record["id"], "name": "Scarf", "stock": 1}
    assert local_storage.update("products", "missing", {"stock": 1}) is None


def test_delete_and_count(local_storage) -> None:
    record = local_storage.insert("products", {"name": "Scarf"})
    local_storage.insert("products", {"name": "Hat"})

    assert local_storage.delete("products", record["id"]) is True
    assert local_storage.delete("products", record["id"]) is False
    assert local_storage.count("products") == 1


def test_query_filters_and_orders(local_storage) -> None:
    local_storage.insert("products", {"id": "a", "category": "Hats", "stock": 5})
    local_storage.insert("products", {"id": "b", "category": "Coats", "stock": 1})
    local_storage.insert("products", {"id": "c", "category": "Hats", "stock": 9})

    hats = local_storage.query("products", filters={"category": "Hats"}, order_by="stock", descending=True)

    assert [record["id"] for record in hats] == ["c", "a"]


def test_loaded_records_are_copies(local_storage) -> None:
    local_storage.insert("products", {"id": "a", "stock": 5})

    local_storage.load("products")[0]["stock"] = 99

    assert local_storage.get("products", "a")["stock"] == 5


def test_commit_applies_all_writes_with_one_file_write(local_storage, mocker) -> None:
    local_storage.insert("products", {"id": "p1", "stock": 10})
    write_spy = mocker.spy(local_storage, "_write_raw")

    results = local_storage.commit(
        [
            WriteOperation(kind="insert", collection="sales", data={"productId": "p1", "quantity": 3}),
            WriteOperation(kind="update", collection="products", record_id="p1", data={"stock": 7}),
        ]
    )

    assert write_spy.call_count == 1
    assert results[0]["productId"] == "p1"
    assert results[1]["stock"] == 7


def test_failed_commit_leaves_state_unchanged(local_storage, mocker) -> None:
    """A failed file write leaves both the in-memory state and the file as they were."""
    local_storage.insert("products", {"id": "p1", "stock": 10})
    mocker.patch("src.common.persistence.local_storage_adapter.os.replace", side_effect=OSError("disk full"))

    with pytest.raises(StorageError):
        local_storage.commit(
            [
                WriteOperation(kind="insert", collection="sales", data={"productId": "p1", "quantity": 3}),
                WriteOperation(kind="update", collection="products", record_id="p1", data={"stock": 7}),
            ]
        )

    assert local_storage.load("sales") == []
    assert local_storage.get("products", "p1")["stock"] == 10


def test_open_rejects_corrupt_file(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        LocalStorageAdapter(str(path)).open()


def test_write_operation_requires_record_id_for_updates() -> None:
    with pytest.raises(ValueError):
        WriteOperation(kind="update", collection="products", data={"stock": 1})
    with pytest.raises(ValueError):
        WriteOperation(kind="upsert", collection="products")
