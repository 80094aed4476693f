"""Console stand-in for the browser UI: renders the views as rich tables."""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from src.analytics_domain.application.analytics_service import AnalyticsService
from src.common.config.constants import VIEWS
from src.common.events.event_bus import DomainEvent, EventBus
from src.common.utils.formatters import format_currency, format_datetime, format_percentage, truncate_text
from src.inventory_domain.application.inventory_service import InventoryService
from src.sales_domain.application.sales_service import SalesService

logger = logging.getLogger(__name__)


class ConsoleController:
    """Re-renders the active view whenever the services report a data change."""

    def __init__(
        self,
        inventory_service: InventoryService,
        sales_service: SalesService,
        analytics_service: AnalyticsService,
        event_bus: EventBus,
        console: Optional[Console] = None,
    ) -> None:
        self.inventory_service = inventory_service
        self.sales_service = sales_service
        self.analytics_service = analytics_service
        self.event_bus = event_bus
        self.console = console or Console()
        self.active_view = "dashboard"

    def start(self) -> None:
        self.event_bus.subscribe(DomainEvent.DATA_CHANGED, self._on_data_changed)

    def stop(self) -> None:
        self.event_bus.unsubscribe(DomainEvent.DATA_CHANGED, self._on_data_changed)

    def _on_data_changed(self, event: DomainEvent, payload: Any) -> None:
        self.refresh()

    def show(self, view: str) -> None:
        """Switches to ``view`` and renders it."""
        if view not in VIEWS:
            raise ValueError(f"Unknown view: {view}")
        self.active_view = view
        self.refresh()

    def refresh(self) -> None:
        getattr(self, f"render_{self.active_view}")()

    def render_dashboard(self) -> None:
        stats = self.analytics_service.get_dashboard_stats()

        summary = Table(title="Dashboard")
        summary.add_column("Units in stock", justify="right")
        summary.add_column("Revenue", justify="right")
        summary.add_column("Profit", justify="right")
        summary.add_column("Avg. margin", justify="right")
        summary.add_row(
            str(stats.total_inventory),
            format_currency(stats.total_sales),
            format_currency(stats.total_profit),
            format_percentage(stats.avg_margin),
        )
        self.console.print(summary)

        top = Table(title="Top products")
        top.add_column("Product")
        top.add_column("Units", justify="right")
        top.add_column("Revenue", justify="right")
        for item in stats.top_products:
            top.add_row(truncate_text(item.product_name, 30), str(item.quantity), format_currency(item.revenue))
        self.console.print(top)

        recent = Table(title="Recent sales")
        recent.add_column("Date")
        recent.add_column("Product")
        recent.add_column("Total", justify="right")
        for sale in stats.recent_sales:
            recent.add_row(format_datetime(sale.date), truncate_text(sale.product_name, 30), format_currency(sale.total))
        self.console.print(recent)

    def render_inventory(self) -> None:
        table = Table(title="Inventory")
        table.add_column("Product")
        table.add_column("Category")
        table.add_column("Stock", justify="right")
        table.add_column("Level")
        table.add_column("Cost", justify="right")
        table.add_column("Price", justify="right")
        table.add_column("Margin", justify="right")
        for product in self.inventory_service.get_all_products():
            table.add_row(
                truncate_text(product.name, 30),
                product.category,
                str(product.stock),
                product.stock_level,
                format_currency(product.cost),
                format_currency(product.price),
                format_percentage(product.margin),
            )
        self.console.print(table)

    def render_sales(self) -> None:
        table = Table(title="Sales")
        table.add_column("Date")
        table.add_column("Product")
        table.add_column("Qty", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Profit", justify="right")
        for sale in self.sales_service.get_recent_sales(limit=50):
            table.add_row(
                format_datetime(sale.date),
                truncate_text(sale.product_name, 30),
                str(sale.quantity),
                format_currency(sale.total),
                format_currency(sale.profit),
            )
        self.console.print(table)

    def render_profits(self) -> None:
        by_category = Table(title="Profit by category")
        by_category.add_column("Category")
        by_category.add_column("Sales", justify="right")
        by_category.add_column("Revenue", justify="right")
        by_category.add_column("Profit", justify="right")
        for row in self.analytics_service.get_profits_by_category():
            by_category.add_row(row.category, str(row.sales), format_currency(row.revenue), format_currency(row.profit))
        self.console.print(by_category)

        by_product = Table(title="Product profitability")
        by_product.add_column("Product")
        by_product.add_column("Category")
        by_product.add_column("Units", justify="right")
        by_product.add_column("Profit", justify="right")
        by_product.add_column("Margin", justify="right")
        for row in self.analytics_service.get_product_profitability():
            by_product.add_row(
                truncate_text(row.product_name, 30),
                row.category,
                str(row.units_sold),
                format_currency(row.profit),
                format_percentage(row.margin),
            )
        self.console.print(by_product)

        trend = Table(title="Last 7 days")
        trend.add_column("Date")
        trend.add_column("Sales", justify="right")
        trend.add_column("Revenue", justify="right")
        for point in self.analytics_service.get_sales_trend(7):
            trend.add_row(point.date, str(point.sales), format_currency(point.revenue))
        self.console.print(trend)
