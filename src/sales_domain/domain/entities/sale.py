"""Sale entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.common.utils.date_utils import format_datetime_for_storage, now_utc, parse_datetime


@dataclass
class Sale:
    """
    A recorded sale.

    Product name, price and cost are copied from the product at sale time so
    later product edits do not change historical figures. ``product_id`` is a
    weak reference: the product may have been deleted since.
    """

    product_id: str
    product_name: str
    quantity: int
    price: float
    cost: float
    date: datetime | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        self.quantity = int(self.quantity)
        self.price = float(self.price)
        self.cost = float(self.cost)
        if self.quantity <= 0:
            raise ValueError("Quantity must be positive.")
        self.date = parse_datetime(self.date) or now_utc()

    @property
    def total(self) -> float:
        return self.price * self.quantity

    @property
    def total_cost(self) -> float:
        return self.cost * self.quantity

    @property
    def profit(self) -> float:
        return self.total - self.total_cost

    @property
    def margin(self) -> float:
        """Profit margin as a percentage of the sale total (0 for a zero total)."""
        if self.total == 0:
            return 0.0
        return self.profit / self.total * 100

    @property
    def profit_per_unit(self) -> float:
        return self.price - self.cost

    def to_storage_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "productId": self.product_id,
            "productName": self.product_name,
            "quantity": self.quantity,
            "price": self.price,
            "cost": self.cost,
            "date": format_datetime_for_storage(self.date),
        }

    @classmethod
    def from_storage_dict(cls, data: dict[str, Any]) -> "Sale":
        return cls(
            id=data.get("id"),
            product_id=data.get("productId"),
            product_name=data.get("productName", ""),
            quantity=data.get("quantity", 0),
            price=data.get("price", 0),
            cost=data.get("cost", 0),
            date=data.get("date"),
        )
