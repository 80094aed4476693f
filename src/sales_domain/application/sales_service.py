"""Application service for recording and reverting sales."""

import logging
from datetime import datetime, timedelta
from typing import Optional

from src.common.dtos.inventory_dtos import OperationResultDTO, SalePreviewDTO, SaleRequestDTO
from src.common.events.event_bus import DomainEvent, EventBus
from src.common.exceptions.custom_exceptions import APIError, StorageError
from src.common.persistence.storage_adapter import IStorageAdapter
from src.common.utils.date_utils import now_utc
from src.common.utils.validators import validate_sale
from src.inventory_domain.domain.entities.product import Product
from src.inventory_domain.domain.repositories.product_repository import IProductRepository
from src.inventory_domain.domain.services.sample_catalog import SAMPLE_SALES
from src.sales_domain.domain.entities.sale import Sale
from src.sales_domain.domain.repositories.sale_repository import ISaleRepository

logger = logging.getLogger(__name__)


class SalesService:
    """
    Records sales against the product catalog.

    A sale record and the matching stock change are written in one
    ``IStorageAdapter.commit`` batch, so a sale is never stored without its
    stock decrement (and a deleted sale never without its stock restore).
    """

    def __init__(
        self,
        product_repo: IProductRepository,
        sale_repo: ISaleRepository,
        storage: IStorageAdapter,
        event_bus: EventBus,
    ) -> None:
        """Initializes the SalesService."""
        self.product_repo = product_repo
        self.sale_repo = sale_repo
        self.storage = storage
        self.event_bus = event_bus

    def get_all_sales(self) -> list[Sale]:
        return self.sale_repo.get_all()

    def get_sale(self, sale_id: str) -> Optional[Sale]:
        return self.sale_repo.get_by_id(sale_id)

    def _record_sale(self, product: Product, quantity: int, sale_date: Optional[datetime] = None) -> Sale:
        """Stores the sale snapshot and the reduced stock together. Raises on storage errors."""
        sale = Sale(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            price=product.price,
            cost=product.cost,
            date=sale_date or now_utc(),
        )
        product.reduce_stock(quantity)

        results = self.storage.commit(
            [
                self.sale_repo.create_operation(sale),
                self.product_repo.stock_operation(product.id, product.stock),
            ]
        )
        return Sale.from_storage_dict(results[0])

    def process_sale(self, sale_request: SaleRequestDTO) -> OperationResultDTO:
        """
        Sells ``quantity`` units of a product.

        Returns:
            OperationResultDTO with the created Sale, or the reasons it was refused.
        """
        product = self.product_repo.get_by_id(sale_request.product_id) if sale_request.product_id else None
        if product is None:
            return OperationResultDTO.fail("Product not found")

        validation = validate_sale(
            {"product_id": sale_request.product_id, "quantity": sale_request.quantity}, product.stock
        )
        if not validation.valid:
            return OperationResultDTO.fail(*validation.errors)

        try:
            created = self._record_sale(product, int(float(sale_request.quantity)))
        except (StorageError, APIError) as e:
            logger.error(f"Error processing sale of product {product.id}: {e}")
            return OperationResultDTO.fail(f"Operation failed: {e.message}")

        logger.info(f"Sale recorded: {created.quantity} x {created.product_name} ({created.total:.2f})")
        self.event_bus.emit(DomainEvent.SALE_ADDED, created)
        self.event_bus.emit(DomainEvent.PRODUCT_UPDATED, product)
        self.event_bus.emit(DomainEvent.DATA_CHANGED)
        return OperationResultDTO.ok(created)

    def delete_sale(self, sale_id: str) -> OperationResultDTO:
        """Deletes a sale and gives its units back to the product, if the product still exists."""
        sale = self.sale_repo.get_by_id(sale_id)
        if sale is None:
            return OperationResultDTO.fail("Sale not found")

        operations = []
        product = self.product_repo.get_by_id(sale.product_id)
        if product is not None:
            product.add_stock(sale.quantity)
            operations.append(self.product_repo.stock_operation(product.id, product.stock))
        else:
            logger.warning(f"Product {sale.product_id} no longer exists, stock not restored for sale {sale_id}")
        operations.append(self.sale_repo.delete_operation(sale_id))

        try:
            self.storage.commit(operations)
        except (StorageError, APIError) as e:
            logger.error(f"Error deleting sale {sale_id}: {e}")
            return OperationResultDTO.fail(f"Operation failed: {e.message}")

        logger.info(f"Sale deleted: {sale_id}")
        self.event_bus.emit(DomainEvent.SALE_DELETED, sale_id)
        self.event_bus.emit(DomainEvent.DATA_CHANGED)
        return OperationResultDTO.ok()

    def calculate_sale_preview(self, product_id: str, quantity: int) -> Optional[SalePreviewDTO]:
        """Projects a sale without storing anything. Returns None for an unknown product."""
        product = self.product_repo.get_by_id(product_id)
        if product is None:
            return None

        total = product.price * quantity
        cost = product.cost * quantity
        return SalePreviewDTO(
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,
            total=total,
            cost=cost,
            profit=total - cost,
            available_stock=product.stock,
            can_sell=product.stock >= quantity,
        )

    def get_sales_by_product(self, product_id: str) -> list[Sale]:
        return self.sale_repo.get_by_product_id(product_id)

    def get_recent_sales(self, limit: int = 10) -> list[Sale]:
        return self.sale_repo.get_recent(limit)

    def get_today_sales(self) -> list[Sale]:
        return self.sale_repo.get_today()

    def get_month_sales(self) -> list[Sale]:
        return self.sale_repo.get_this_month()

    def initialize_if_empty(self) -> bool:
        """Records the sample sales against the current catalog when there are no sales."""
        if self.sale_repo.count() > 0:
            return False

        products = {product.name: product for product in self.product_repo.get_all()}
        now = now_utc()
        seeded = 0

        for product_name, quantity, days_ago in SAMPLE_SALES:
            product = products.get(product_name)
            if product is None or product.stock < quantity:
                continue
            try:
                self._record_sale(product, quantity, now - timedelta(days=days_ago))
                seeded += 1
            except (StorageError, APIError) as e:
                logger.error(f"Error seeding sample sale for {product_name}: {e}")
                break

        if not seeded:
            return False

        logger.info(f"Seeded {seeded} sample sales")
        self.event_bus.emit(DomainEvent.DATA_CHANGED)
        return True
