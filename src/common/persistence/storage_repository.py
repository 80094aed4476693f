"""Base class for repositories backed by an IStorageAdapter."""

import logging
from typing import Any, Optional

from src.common.exceptions.custom_exceptions import APIError, StorageError
from src.common.persistence.storage_adapter import IStorageAdapter, WriteOperation

logger = logging.getLogger(__name__)


class StorageRepository:
    """
    Typed collection access over a storage adapter.

    Subclasses set ``collection`` and ``entity_cls``; the entity class must
    provide ``to_storage_dict()`` and ``from_storage_dict()``. Read paths
    degrade to empty results when the backend fails; write paths let the
    error propagate to the service layer.
    """

    collection: str = ""
    entity_cls: Any = None

    def __init__(self, storage: IStorageAdapter) -> None:
        self.storage = storage

    def _to_entities(self, records: list[dict[str, Any]]) -> list[Any]:
        entities = []
        for record in records:
            try:
                entities.append(self.entity_cls.from_storage_dict(record))
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed {self.collection} record {record.get('id')}: {e}")
        return entities

    def _query(
        self, filters: Optional[dict[str, Any]] = None, order_by: Optional[str] = None, descending: bool = False
    ) -> list[Any]:
        try:
            records = self.storage.query(self.collection, filters=filters, order_by=order_by, descending=descending)
        except (StorageError, APIError) as e:
            logger.error(f"Error querying {self.collection}: {e}")
            return []
        return self._to_entities(records)

    def get_all(self) -> list[Any]:
        try:
            records = self.storage.load(self.collection)
        except (StorageError, APIError) as e:
            logger.error(f"Error reading {self.collection}: {e}")
            return []
        return self._to_entities(records)

    def get_by_id(self, record_id: str) -> Optional[Any]:
        try:
            record = self.storage.get(self.collection, record_id)
        except (StorageError, APIError) as e:
            logger.error(f"Error reading {self.collection} record {record_id}: {e}")
            return None
        if record is None:
            return None
        entities = self._to_entities([record])
        return entities[0] if entities else None

    def create(self, entity: Any) -> Any:
        record = self.storage.insert(self.collection, entity.to_storage_dict())
        return self.entity_cls.from_storage_dict(record)

    def _update(self, record_id: str, changes: dict[str, Any]) -> Optional[Any]:
        if not changes:
            return self.get_by_id(record_id)
        record = self.storage.update(self.collection, record_id, changes)
        return self.entity_cls.from_storage_dict(record) if record is not None else None

    def delete(self, record_id: str) -> bool:
        return self.storage.delete(self.collection, record_id)

    def count(self) -> int:
        try:
            return self.storage.count(self.collection)
        except (StorageError, APIError) as e:
            logger.error(f"Error counting {self.collection}: {e}")
            return 0

    def exists(self, record_id: str) -> bool:
        return self.get_by_id(record_id) is not None

    def create_operation(self, entity: Any) -> WriteOperation:
        """Insert of ``entity`` for use in an atomic ``IStorageAdapter.commit`` batch."""
        return WriteOperation(kind="insert", collection=self.collection, data=entity.to_storage_dict())

    def delete_operation(self, record_id: str) -> WriteOperation:
        return WriteOperation(kind="delete", collection=self.collection, record_id=record_id)
