"""Storage adapter interface shared by the local and remote backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class WriteOperation:
    """A single write inside an atomic batch (see ``IStorageAdapter.commit``)."""

    kind: str  # "insert", "update" or "delete"
    collection: str
    record_id: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)

    KINDS = ("insert", "update", "delete")

    def __post_init__(self) -> None:
        if self.kind not in self.KINDS:
            raise ValueError(f"Unknown write operation kind: {self.kind}")
        if self.kind != "insert" and not self.record_id:
            raise ValueError(f"A record id is required for {self.kind} operations.")


class IStorageAdapter(ABC):
    """
    Key-value persistence of entity collections.

    Collections are addressed by logical name ("products", "sales"); each
    backend maps them onto its own keys. Records are plain dicts carrying an
    ``id`` field.
    """

    @abstractmethod
    def open(self) -> None:
        """Acquires the underlying resource (file handle contents, HTTP session)."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Releases the underlying resource."""
        pass

    @abstractmethod
    def load(self, collection: str) -> list[dict[str, Any]]:
        """Returns every record of a collection."""
        pass

    @abstractmethod
    def get(self, collection: str, record_id: str) -> Optional[dict[str, Any]]:
        """Returns one record, or None when the id is unknown."""
        pass

    @abstractmethod
    def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Stores a new record, assigning an id when it has none, and returns it."""
        pass

    @abstractmethod
    def update(self, collection: str, record_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Merges ``changes`` into a record; returns the merged record or None when unknown."""
        pass

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> bool:
        """Removes a record; returns False when it did not exist."""
        pass

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Returns records matching every equality filter, optionally ordered by one field."""
        pass

    @abstractmethod
    def commit(self, operations: list[WriteOperation]) -> list[Any]:
        """Applies all operations as one unit: either every write lands or none does."""
        pass

    def count(self, collection: str) -> int:
        return len(self.load(collection))

    def __enter__(self) -> "IStorageAdapter":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
