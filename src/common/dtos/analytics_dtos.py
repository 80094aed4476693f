"""Data Transfer Objects for analytics reports."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TopProductDTO:
    product_id: str
    product_name: str
    quantity: int = 0
    revenue: float = 0.0
    profit: float = 0.0


@dataclass
class CategoryProfitDTO:
    category: str
    revenue: float = 0.0
    cost: float = 0.0
    profit: float = 0.0
    sales: int = 0  # Number of sale records, not units


@dataclass
class ProductProfitabilityDTO:
    product_id: str
    product_name: str
    category: str
    units_sold: int = 0
    revenue: float = 0.0
    cost: float = 0.0
    profit: float = 0.0
    margin: float = 0.0


@dataclass
class DashboardStatsDTO:
    total_inventory: int
    total_sales: float
    total_profit: float
    avg_margin: float
    top_products: list[TopProductDTO] = field(default_factory=list)
    recent_sales: list[Any] = field(default_factory=list)  # Sale entities, newest first


@dataclass
class SalesTrendPointDTO:
    date: str  # ISO calendar date
    sales: int = 0
    revenue: float = 0.0
    profit: float = 0.0


@dataclass
class PerformanceMetricsDTO:
    total_products: int
    total_sales: int
    average_sale_value: float
    average_units_per_sale: float
    low_stock_products: int
    out_of_stock_products: int
