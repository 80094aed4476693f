"""Product entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import InsufficientStockError
from src.common.utils.date_utils import format_datetime_for_storage, now_utc, parse_datetime


@dataclass
class Product:
    """A catalog item with its current stock, unit cost and selling price."""

    name: str
    category: str
    stock: int
    cost: float
    price: float
    id: str | None = None  # Assigned by the storage adapter on create
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Post-initialization for type coercion and validation."""
        self.stock = int(self.stock)
        self.cost = float(self.cost)
        self.price = float(self.price)
        if self.stock < 0:
            raise ValueError("Stock cannot be negative.")
        self.created_at = parse_datetime(self.created_at) or now_utc()

    @property
    def profit(self) -> float:
        """Profit per unit."""
        return self.price - self.cost

    @property
    def margin(self) -> float:
        """Profit margin as a percentage of the selling price."""
        if self.price == 0:
            return 0.0
        return self.profit / self.price * 100

    @property
    def stock_level(self) -> str:
        """One of ``high``, ``medium``, ``low`` or ``out``."""
        if self.stock > settings.STOCK_LEVEL_HIGH:
            return "high"
        if self.stock > settings.STOCK_LEVEL_MEDIUM:
            return "medium"
        if self.stock > 0:
            return "low"
        return "out"

    def is_in_stock(self) -> bool:
        return self.stock > 0

    def is_low_stock(self) -> bool:
        return 0 < self.stock <= settings.STOCK_LEVEL_MEDIUM

    def reduce_stock(self, quantity: int) -> None:
        """Removes units from stock; never lets stock go negative."""
        if quantity > self.stock:
            raise InsufficientStockError(requested=quantity, available=self.stock)
        self.stock -= quantity

    def add_stock(self, quantity: int) -> None:
        self.stock += quantity

    def to_storage_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "stock": self.stock,
            "cost": self.cost,
            "price": self.price,
            "createdAt": format_datetime_for_storage(self.created_at),
        }

    @classmethod
    def from_storage_dict(cls, data: dict[str, Any]) -> "Product":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            category=data.get("category", ""),
            stock=data.get("stock", 0),
            cost=data.get("cost", 0),
            price=data.get("price", 0),
            created_at=data.get("createdAt"),
        )
