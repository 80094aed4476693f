"""Application service for sales statistics and reports."""

import logging
from datetime import timedelta

from src.common.dtos.analytics_dtos import (
    CategoryProfitDTO,
    DashboardStatsDTO,
    PerformanceMetricsDTO,
    ProductProfitabilityDTO,
    SalesTrendPointDTO,
    TopProductDTO,
)
from src.common.utils.date_utils import local_date, local_today
from src.inventory_domain.domain.repositories.product_repository import IProductRepository
from src.sales_domain.domain.repositories.sale_repository import ISaleRepository

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "N/A"


class AnalyticsService:
    """
    Read-only aggregation over the sale and product repositories.

    Nothing is cached: every report folds the full sale list again, joining
    against the current product list where a category is needed.
    """

    def __init__(self, product_repo: IProductRepository, sale_repo: ISaleRepository) -> None:
        self.product_repo = product_repo
        self.sale_repo = sale_repo

    def get_total_revenue(self) -> float:
        return sum(sale.total for sale in self.sale_repo.get_all())

    def get_total_costs(self) -> float:
        return sum(sale.total_cost for sale in self.sale_repo.get_all())

    def get_total_profit(self) -> float:
        return self.get_total_revenue() - self.get_total_costs()

    def get_average_margin(self) -> float:
        """Overall profit margin in percent; 0 when nothing has been sold."""
        revenue = self.get_total_revenue()
        if revenue == 0:
            return 0.0
        return self.get_total_profit() / revenue * 100

    def get_top_products(self, limit: int = 5) -> list[TopProductDTO]:
        """Products ranked by revenue. Ties keep the order in which products were first sold."""
        product_sales: dict[str, TopProductDTO] = {}

        for sale in self.sale_repo.get_all():
            stats = product_sales.setdefault(
                sale.product_id, TopProductDTO(product_id=sale.product_id, product_name=sale.product_name)
            )
            stats.quantity += sale.quantity
            stats.revenue += sale.total
            stats.profit += sale.profit

        ranked = sorted(product_sales.values(), key=lambda stats: stats.revenue, reverse=True)
        return ranked[: max(limit, 0)]

    def get_profits_by_category(self) -> list[CategoryProfitDTO]:
        """Revenue, cost and profit per category, highest profit first."""
        categories_by_product = {product.id: product.category for product in self.product_repo.get_all()}
        category_profits: dict[str, CategoryProfitDTO] = {}

        for sale in self.sale_repo.get_all():
            category = categories_by_product.get(sale.product_id)
            if category is None:
                # Sales of deleted products have no category and are left out
                continue
            stats = category_profits.setdefault(category, CategoryProfitDTO(category=category))
            stats.revenue += sale.total
            stats.cost += sale.total_cost
            stats.profit += sale.profit
            stats.sales += 1

        return sorted(category_profits.values(), key=lambda stats: stats.profit, reverse=True)

    def get_product_profitability(self) -> list[ProductProfitabilityDTO]:
        """Per-product units, revenue, cost, profit and margin, highest profit first."""
        categories_by_product = {product.id: product.category for product in self.product_repo.get_all()}
        product_stats: dict[str, ProductProfitabilityDTO] = {}

        for sale in self.sale_repo.get_all():
            stats = product_stats.setdefault(
                sale.product_id,
                ProductProfitabilityDTO(
                    product_id=sale.product_id,
                    product_name=sale.product_name,
                    category=categories_by_product.get(sale.product_id, UNKNOWN_CATEGORY),
                ),
            )
            stats.units_sold += sale.quantity
            stats.revenue += sale.total
            stats.cost += sale.total_cost
            stats.profit += sale.profit

        for stats in product_stats.values():
            stats.margin = stats.profit / stats.revenue * 100 if stats.revenue > 0 else 0.0

        return sorted(product_stats.values(), key=lambda stats: stats.profit, reverse=True)

    def get_dashboard_stats(self) -> DashboardStatsDTO:
        products = self.product_repo.get_all()
        return DashboardStatsDTO(
            total_inventory=sum(product.stock for product in products),
            total_sales=self.get_total_revenue(),
            total_profit=self.get_total_profit(),
            avg_margin=self.get_average_margin(),
            top_products=self.get_top_products(5),
            recent_sales=self.sale_repo.get_recent(5),
        )

    def get_sales_trend(self, days: int = 7) -> list[SalesTrendPointDTO]:
        """
        Daily sale count, revenue and profit for the last ``days`` calendar days.

        Days are taken in the configured time zone, today included, and
        returned oldest first. Days without sales are present with zeros.
        """
        today = local_today()
        trend: dict[str, SalesTrendPointDTO] = {}
        for offset in range(days - 1, -1, -1):
            day_key = (today - timedelta(days=offset)).isoformat()
            trend[day_key] = SalesTrendPointDTO(date=day_key)

        for sale in self.sale_repo.get_all():
            point = trend.get(local_date(sale.date).isoformat())
            if point is None:
                continue
            point.sales += 1
            point.revenue += sale.total
            point.profit += sale.profit

        return list(trend.values())

    def get_performance_metrics(self) -> PerformanceMetricsDTO:
        sales = self.sale_repo.get_all()
        products = self.product_repo.get_all()
        sale_count = len(sales)
        revenue = sum(sale.total for sale in sales)
        units = sum(sale.quantity for sale in sales)

        return PerformanceMetricsDTO(
            total_products=len(products),
            total_sales=sale_count,
            average_sale_value=revenue / sale_count if sale_count else 0.0,
            average_units_per_sale=units / sale_count if sale_count else 0.0,
            low_stock_products=sum(1 for product in products if product.is_low_stock()),
            out_of_stock_products=sum(1 for product in products if not product.is_in_stock()),
        )
