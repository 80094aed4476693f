"""Product repository interface."""
from abc import ABC, abstractmethod
from typing import Optional

from src.common.dtos.inventory_dtos import ProductUpdateDTO
from src.common.persistence.storage_adapter import WriteOperation
from src.inventory_domain.domain.entities.product import Product


class IProductRepository(ABC):

    @abstractmethod
    def get_all(self) -> list[Product]:
        """Retrieves all products."""
        pass

    @abstractmethod
    def get_by_id(self, product_id: str) -> Optional[Product]:
        """Retrieves a product by id, or None if unknown."""
        pass

    @abstractmethod
    def create(self, product: Product) -> Product:
        """Persists a new product and returns it with its assigned id."""
        pass

    @abstractmethod
    def update(self, product_id: str, updates: ProductUpdateDTO) -> Optional[Product]:
        """Applies the set fields of ``updates``; returns None if the product is unknown."""
        pass

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Deletes a product; returns False if it did not exist."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored products."""
        pass

    @abstractmethod
    def get_by_category(self, category: str) -> list[Product]:
        """Retrieves the products of one category."""
        pass

    @abstractmethod
    def search(self, text: str) -> list[Product]:
        """Case-insensitive substring search on product names."""
        pass

    @abstractmethod
    def get_low_stock(self) -> list[Product]:
        """Products with 0 < stock <= the medium stock threshold."""
        pass

    @abstractmethod
    def get_out_of_stock(self) -> list[Product]:
        """Products with zero stock."""
        pass

    @abstractmethod
    def update_stock(self, product_id: str, stock: int) -> Optional[Product]:
        """Sets the stock of a product."""
        pass

    @abstractmethod
    def reduce_stock(self, product_id: str, quantity: int) -> Optional[Product]:
        """Removes units from stock; raises InsufficientStockError instead of going negative."""
        pass

    @abstractmethod
    def stock_operation(self, product_id: str, stock: int) -> WriteOperation:
        """Stock update for use in an atomic storage batch."""
        pass

    @abstractmethod
    def initialize_sample_data(self) -> list[Product]:
        """Creates the sample catalog."""
        pass
