"""Data Transfer Objects for inventory and sales operations."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional

from src.common.utils.date_utils import format_datetime_for_storage


@dataclass
class OperationResultDTO:
    """Result returned by every mutating service operation."""

    success: bool
    data: Any = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, data: Any = None) -> "OperationResultDTO":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, *errors: str) -> "OperationResultDTO":
        return cls(success=False, errors=list(errors))


@dataclass
class ProductUpdateDTO:
    """Partial product update. Only fields that are not None are applied."""

    name: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = None
    cost: Optional[float] = None
    price: Optional[float] = None

    def to_changes(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class SaleUpdateDTO:
    """Partial sale update for correcting descriptive fields of a recorded sale."""

    product_name: Optional[str] = None
    date: Optional[datetime] = None

    def to_changes(self) -> dict[str, Any]:
        changes = {}
        if self.product_name is not None:
            changes["productName"] = self.product_name
        if self.date is not None:
            changes["date"] = format_datetime_for_storage(self.date)
        return changes


@dataclass
class SaleRequestDTO:
    """Input of a sale: which product and how many units."""

    product_id: str
    quantity: int


@dataclass
class SalePreviewDTO:
    """Read-only projection of a prospective sale."""

    product_name: str
    quantity: int
    unit_price: float
    total: float
    cost: float
    profit: float
    available_stock: int
    can_sell: bool
