"""Sale repository interface."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.common.dtos.inventory_dtos import SaleUpdateDTO
from src.common.persistence.storage_adapter import WriteOperation
from src.sales_domain.domain.entities.sale import Sale


class ISaleRepository(ABC):

    @abstractmethod
    def get_all(self) -> list[Sale]:
        """Retrieves all sales."""
        pass

    @abstractmethod
    def get_by_id(self, sale_id: str) -> Optional[Sale]:
        """Retrieves a sale by id, or None if unknown."""
        pass

    @abstractmethod
    def create(self, sale: Sale) -> Sale:
        """Persists a new sale and returns it with its assigned id."""
        pass

    @abstractmethod
    def update(self, sale_id: str, updates: SaleUpdateDTO) -> Optional[Sale]:
        """Applies the set fields of ``updates``; returns None if the sale is unknown."""
        pass

    @abstractmethod
    def delete(self, sale_id: str) -> bool:
        """Deletes a sale; returns False if it did not exist."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored sales."""
        pass

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> list[Sale]:
        """Retrieves the sales of one product."""
        pass

    @abstractmethod
    def get_by_date_range(self, start: datetime, end: datetime) -> list[Sale]:
        """Sales with start <= date <= end."""
        pass

    @abstractmethod
    def get_recent(self, limit: int = 10) -> list[Sale]:
        """The ``limit`` most recent sales, newest first."""
        pass

    @abstractmethod
    def get_today(self) -> list[Sale]:
        """Sales of the current calendar day."""
        pass

    @abstractmethod
    def get_this_month(self) -> list[Sale]:
        """Sales of the current calendar month."""
        pass

    @abstractmethod
    def create_operation(self, sale: Sale) -> WriteOperation:
        """Insert for use in an atomic storage batch."""
        pass

    @abstractmethod
    def delete_operation(self, sale_id: str) -> WriteOperation:
        """Delete for use in an atomic storage batch."""
        pass
