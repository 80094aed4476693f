"""JSON file implementation of the storage adapter."""

import copy
import json
import logging
import os
import uuid
from typing import Any, Optional

from src.common.config.constants import COLLECTIONS, STORAGE_KEYS
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import StorageError
from src.common.persistence.storage_adapter import IStorageAdapter, WriteOperation

logger = logging.getLogger(__name__)

# Logical collection name -> key of the array in the storage file
COLLECTION_KEYS = {
    COLLECTIONS["PRODUCTS"]: STORAGE_KEYS["PRODUCTS"],
    COLLECTIONS["SALES"]: STORAGE_KEYS["SALES"],
}


class LocalStorageAdapter(IStorageAdapter):
    """
    Synchronous storage in a single JSON file.

    The whole document is kept in memory after ``open()``. Every write goes to
    a copy which is written to a temp file and moved over the original with
    ``os.replace``; the in-memory state is swapped only after the write
    succeeded, so a failed write leaves memory and disk unchanged.
    """

    def __init__(self, file_path: Optional[str] = None) -> None:
        """Initializes the adapter; nothing is read until ``open()``."""
        self.file_path = file_path or settings.LOCAL_STORAGE_PATH
        self._data: Optional[dict[str, list[dict[str, Any]]]] = None

    def _empty_data(self) -> dict[str, list[dict[str, Any]]]:
        return {key: [] for key in COLLECTION_KEYS.values()}

    def open(self) -> None:
        """Loads the storage file, creating it with empty collections if missing."""
        if self._data is not None:
            return

        if not os.path.exists(self.file_path):
            data = self._empty_data()
            self._write_raw(data)
            self._data = data
            logger.info(f"Created local storage file at {self.file_path}")
            return

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in {self.file_path}: {e}", original_exception=e)
        except OSError as e:
            raise StorageError(f"Could not read {self.file_path}: {e}", original_exception=e)

        if not isinstance(raw, dict):
            raise StorageError(f"Unexpected storage layout in {self.file_path}")

        data = self._empty_data()
        data.update(raw)
        self._data = data
        logger.debug(f"Loaded local storage from {self.file_path}")

    def close(self) -> None:
        self._data = None

    def _write_raw(self, data: dict[str, list[dict[str, Any]]]) -> None:
        """Writes the whole document through a temp file."""
        temp_path = self.file_path + ".tmp"
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.file_path)
        except (OSError, TypeError, ValueError) as e:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise StorageError(f"Failed to save data to {self.file_path}: {e}", original_exception=e)

    def _records(self, collection: str) -> list[dict[str, Any]]:
        if self._data is None:
            self.open()
        return self._data.setdefault(COLLECTION_KEYS.get(collection, collection), [])

    @staticmethod
    def _find_index(records: list[dict[str, Any]], record_id: str) -> int:
        for index, record in enumerate(records):
            if str(record.get("id")) == str(record_id):
                return index
        return -1

    def _apply(self, data: dict[str, list[dict[str, Any]]], operation: WriteOperation) -> Any:
        """Applies one write to ``data`` in place and returns its result."""
        records = data.setdefault(COLLECTION_KEYS.get(operation.collection, operation.collection), [])

        if operation.kind == "insert":
            record = dict(operation.data)
            if not record.get("id"):
                record["id"] = uuid.uuid4().hex
            records.append(record)
            return copy.deepcopy(record)

        index = self._find_index(records, operation.record_id)

        if operation.kind == "update":
            if index == -1:
                return None
            records[index] = {**records[index], **operation.data, "id": records[index]["id"]}
            return copy.deepcopy(records[index])

        if index == -1:
            return False
        records.pop(index)
        return True

    def load(self, collection: str) -> list[dict[str, Any]]:
        return copy.deepcopy(self._records(collection))

    def get(self, collection: str, record_id: str) -> Optional[dict[str, Any]]:
        records = self._records(collection)
        index = self._find_index(records, record_id)
        return copy.deepcopy(records[index]) if index != -1 else None

    def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        return self.commit([WriteOperation(kind="insert", collection=collection, data=record)])[0]

    def update(self, collection: str, record_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        return self.commit([WriteOperation(kind="update", collection=collection, record_id=record_id, data=changes)])[0]

    def delete(self, collection: str, record_id: str) -> bool:
        return self.commit([WriteOperation(kind="delete", collection=collection, record_id=record_id)])[0]

    def query(
        self,
        collection: str,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        records = [
            record
            for record in self._records(collection)
            if all(record.get(field) == value for field, value in (filters or {}).items())
        ]
        if order_by:
            # Records without the field sort last in ascending order
            records = sorted(
                records,
                key=lambda r: (r.get(order_by) is None, r.get(order_by) if r.get(order_by) is not None else 0),
                reverse=descending,
            )
        return copy.deepcopy(records)

    def commit(self, operations: list[WriteOperation]) -> list[Any]:
        """Applies every operation to a copy and persists it with a single file write."""
        if self._data is None:
            self.open()
        if not operations:
            return []

        staged = copy.deepcopy(self._data)
        results = [self._apply(staged, operation) for operation in operations]
        self._write_raw(staged)
        self._data = staged
        logger.debug(f"Committed {len(operations)} write(s) to {self.file_path}")
        return results
