"""Storage adapter implementation of the Sale repository."""

from datetime import datetime
from typing import Optional

from src.common.config.constants import COLLECTIONS
from src.common.dtos.inventory_dtos import SaleUpdateDTO
from src.common.persistence.storage_repository import StorageRepository
from src.common.utils.date_utils import day_bounds, local_today, month_bounds, parse_datetime
from src.sales_domain.domain.entities.sale import Sale
from src.sales_domain.domain.repositories.sale_repository import ISaleRepository


class StorageSaleRepository(StorageRepository, ISaleRepository):
    """Sale repository working against any IStorageAdapter."""

    collection = COLLECTIONS["SALES"]
    entity_cls = Sale

    def update(self, sale_id: str, updates: SaleUpdateDTO) -> Optional[Sale]:
        return self._update(sale_id, updates.to_changes())

    def get_by_product_id(self, product_id: str) -> list[Sale]:
        return self._query(filters={"productId": product_id})

    def get_by_date_range(self, start: datetime, end: datetime) -> list[Sale]:
        start, end = parse_datetime(start), parse_datetime(end)
        return [sale for sale in self.get_all() if start <= sale.date <= end]

    def get_recent(self, limit: int = 10) -> list[Sale]:
        sales = self._query(order_by="date", descending=True)
        # Backends order the stored strings; order on parsed dates
        return sorted(sales, key=lambda sale: sale.date, reverse=True)[:limit]

    def get_today(self) -> list[Sale]:
        return self.get_by_date_range(*day_bounds(local_today()))

    def get_this_month(self) -> list[Sale]:
        return self.get_by_date_range(*month_bounds(local_today()))

    def get_total_revenue(self) -> float:
        return sum(sale.total for sale in self.get_all())

    def get_total_profit(self) -> float:
        return sum(sale.profit for sale in self.get_all())
