"""Application service for product catalog and stock management."""

import logging
from typing import Any, Mapping, Optional

from src.common.dtos.inventory_dtos import OperationResultDTO, ProductUpdateDTO
from src.common.events.event_bus import DomainEvent, EventBus
from src.common.exceptions.custom_exceptions import APIError, InsufficientStockError, StorageError
from src.common.utils.validators import is_positive_integer, validate_product
from src.inventory_domain.domain.entities.product import Product
from src.inventory_domain.domain.repositories.product_repository import IProductRepository

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


class InventoryService:
    """Validates and applies product changes, announcing them on the event bus."""

    def __init__(self, product_repo: IProductRepository, event_bus: EventBus) -> None:
        """Initializes the InventoryService."""
        self.product_repo = product_repo
        self.event_bus = event_bus

    def _emit_change(self, event: DomainEvent, payload: Any) -> None:
        self.event_bus.emit(event, payload)
        self.event_bus.emit(DomainEvent.DATA_CHANGED)

    def get_all_products(self) -> list[Product]:
        return self.product_repo.get_all()

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.product_repo.get_by_id(product_id)

    def add_product(self, product_data: Mapping[str, Any]) -> OperationResultDTO:
        """
        Validates and stores a new product.

        Args:
            product_data: Mapping with name, category, stock, cost and price.

        Returns:
            OperationResultDTO with the created Product, or the validation errors.
        """
        validation = validate_product(product_data)
        if not validation.valid:
            return OperationResultDTO.fail(*validation.errors)

        product = Product(
            name=str(product_data["name"]).strip(),
            category=str(product_data["category"]).strip(),
            stock=int(float(product_data["stock"])),
            cost=product_data["cost"],
            price=product_data["price"],
        )

        try:
            created = self.product_repo.create(product)
        except (StorageError, APIError) as e:
            logger.error(f"Error creating product {product.name}: {e}")
            return OperationResultDTO.fail(f"Operation failed: {e.message}")

        logger.info(f"Product added: {created.name} ({created.id})")
        self._emit_change(DomainEvent.PRODUCT_ADDED, created)
        return OperationResultDTO.ok(created)

    def update_product(self, product_id: str, updates: ProductUpdateDTO) -> OperationResultDTO:
        """Applies a partial update after validating the merged product."""
        product = self.product_repo.get_by_id(product_id)
        if product is None:
            return OperationResultDTO.fail(PRODUCT_NOT_FOUND)

        merged = {**product.to_storage_dict(), **updates.to_changes()}
        validation = validate_product(merged)
        if not validation.valid:
            return OperationResultDTO.fail(*validation.errors)

        try:
            updated = self.product_repo.update(product_id, updates)
        except (StorageError, APIError) as e:
            logger.error(f"Error updating product {product_id}: {e}")
            return OperationResultDTO.fail(f"Operation failed: {e.message}")

        if updated is None:
            return OperationResultDTO.fail(PRODUCT_NOT_FOUND)

        logger.info(f"Product updated: {updated.name} ({updated.id})")
        self._emit_change(DomainEvent.PRODUCT_UPDATED, updated)
        return OperationResultDTO.ok(updated)

    def delete_product(self, product_id: str) -> OperationResultDTO:
        try:
            deleted = self.product_repo.delete(product_id)
        except (StorageError, APIError) as e:
            logger.error(f"Error deleting product {product_id}: {e}")
            return OperationResultDTO.fail(f"Operation failed: {e.message}")

        if not deleted:
            return OperationResultDTO.fail(PRODUCT_NOT_FOUND)

        logger.info(f"Product deleted: {product_id}")
        self._emit_change(DomainEvent.PRODUCT_DELETED, product_id)
        return OperationResultDTO.ok()

    def reduce_stock(self, product_id: str, quantity: int) -> OperationResultDTO:
        """Removes units from a product's stock. Fails rather than going below zero."""
        if not is_positive_integer(quantity):
            return OperationResultDTO.fail("Quantity must be a positive whole number")

        try:
            updated = self.product_repo.reduce_stock(product_id, int(quantity))
        except InsufficientStockError as e:
            return OperationResultDTO.fail(e.message)
        except (StorageError, APIError) as e:
            logger.error(f"Error reducing stock of product {product_id}: {e}")
            return OperationResultDTO.fail(f"Operation failed: {e.message}")

        if updated is None:
            return OperationResultDTO.fail(PRODUCT_NOT_FOUND)

        logger.info(f"Stock of {updated.name} reduced by {quantity} to {updated.stock}")
        self._emit_change(DomainEvent.PRODUCT_UPDATED, updated)
        return OperationResultDTO.ok(updated)

    def restock(self, product_id: str, quantity: int) -> OperationResultDTO:
        """Adds units to a product's stock."""
        if not is_positive_integer(quantity):
            return OperationResultDTO.fail("Quantity must be a positive whole number")

        product = self.product_repo.get_by_id(product_id)
        if product is None:
            return OperationResultDTO.fail(PRODUCT_NOT_FOUND)

        product.add_stock(int(quantity))
        try:
            updated = self.product_repo.update_stock(product_id, product.stock)
        except (StorageError, APIError) as e:
            logger.error(f"Error restocking product {product_id}: {e}")
            return OperationResultDTO.fail(f"Operation failed: {e.message}")

        if updated is None:
            return OperationResultDTO.fail(PRODUCT_NOT_FOUND)

        logger.info(f"Restocked {updated.name} with {quantity} units, stock now {updated.stock}")
        self._emit_change(DomainEvent.PRODUCT_UPDATED, updated)
        return OperationResultDTO.ok(updated)

    def get_products_by_category(self, category: str) -> list[Product]:
        return self.product_repo.get_by_category(category)

    def search_products(self, text: str) -> list[Product]:
        return self.product_repo.search(text)

    def get_low_stock_products(self) -> list[Product]:
        return self.product_repo.get_low_stock()

    def get_out_of_stock_products(self) -> list[Product]:
        return self.product_repo.get_out_of_stock()

    def get_total_inventory_value(self) -> float:
        """Value of the stock at cost."""
        return sum(product.cost * product.stock for product in self.product_repo.get_all())

    def get_total_potential_revenue(self) -> float:
        """Value of the stock at selling price."""
        return sum(product.price * product.stock for product in self.product_repo.get_all())

    def get_total_stock(self) -> int:
        return sum(product.stock for product in self.product_repo.get_all())

    def get_stock_alerts(self) -> dict[str, list[Product]]:
        return {
            "low_stock": self.get_low_stock_products(),
            "out_of_stock": self.get_out_of_stock_products(),
        }

    def initialize_if_empty(self) -> bool:
        """Seeds the sample catalog when there are no products. Returns True if it seeded."""
        if self.product_repo.count() > 0:
            return False

        try:
            self.product_repo.initialize_sample_data()
        except (StorageError, APIError) as e:
            logger.error(f"Error seeding sample products: {e}")
            return False

        self.event_bus.emit(DomainEvent.DATA_CHANGED)
        return True
