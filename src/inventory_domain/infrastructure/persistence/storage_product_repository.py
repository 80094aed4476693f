"""Storage adapter implementation of the Product repository."""

import logging
from typing import Optional

from src.common.config.constants import COLLECTIONS
from src.common.dtos.inventory_dtos import ProductUpdateDTO
from src.common.persistence.storage_adapter import WriteOperation
from src.common.persistence.storage_repository import StorageRepository
from src.inventory_domain.domain.entities.product import Product
from src.inventory_domain.domain.repositories.product_repository import IProductRepository
from src.inventory_domain.domain.services.sample_catalog import SAMPLE_PRODUCTS

logger = logging.getLogger(__name__)


class StorageProductRepository(StorageRepository, IProductRepository):
    """Product repository working against any IStorageAdapter."""

    collection = COLLECTIONS["PRODUCTS"]
    entity_cls = Product

    def update(self, product_id: str, updates: ProductUpdateDTO) -> Optional[Product]:
        return self._update(product_id, updates.to_changes())

    def get_by_category(self, category: str) -> list[Product]:
        return self._query(filters={"category": category})

    def search(self, text: str) -> list[Product]:
        needle = text.lower()
        return [product for product in self.get_all() if needle in product.name.lower()]

    def get_low_stock(self) -> list[Product]:
        return [product for product in self.get_all() if product.is_low_stock()]

    def get_out_of_stock(self) -> list[Product]:
        return [product for product in self.get_all() if not product.is_in_stock()]

    def update_stock(self, product_id: str, stock: int) -> Optional[Product]:
        return self.update(product_id, ProductUpdateDTO(stock=stock))

    def reduce_stock(self, product_id: str, quantity: int) -> Optional[Product]:
        product = self.get_by_id(product_id)
        if product is None:
            return None
        product.reduce_stock(quantity)
        return self.update_stock(product_id, product.stock)

    def stock_operation(self, product_id: str, stock: int) -> WriteOperation:
        return WriteOperation(kind="update", collection=self.collection, record_id=product_id, data={"stock": stock})

    def initialize_sample_data(self) -> list[Product]:
        created = [self.create(Product(**data)) for data in SAMPLE_PRODUCTS]
        logger.info(f"Seeded {len(created)} sample products")
        return created
