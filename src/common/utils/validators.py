"""Validation functions for product and sale input."""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from src.common.config.constants import CATEGORIES


@dataclass
class ValidationResult:
    """Outcome of a validation pass; errors are user-facing messages."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def is_required(value: Any) -> bool:
    """True when the value is present (non-blank for strings)."""
    if isinstance(value, str):
        return len(value.strip()) > 0
    return value is not None


def is_non_negative_integer(value: Any) -> bool:
    """True for whole numbers >= 0 (``"5"`` and ``5.0`` are accepted)."""
    num = _to_number(value)
    return num is not None and num.is_integer() and num >= 0


def is_positive_integer(value: Any) -> bool:
    """True for whole numbers > 0."""
    return is_non_negative_integer(value) and _to_number(value) > 0


def is_valid_price(value: Any) -> bool:
    """True for finite numbers > 0."""
    num = _to_number(value)
    return num is not None and math.isfinite(num) and num > 0


def has_sufficient_stock(available: int, requested: int) -> bool:
    return available >= requested


def validate_product(data: Mapping[str, Any]) -> ValidationResult:
    """
    Validates product input. All failures are collected, none short-circuit.

    Args:
        data: Mapping with name, category, stock, cost and price.
    """
    errors = []

    if not is_required(data.get("name")):
        errors.append("Product name is required")

    if not is_required(data.get("category")):
        errors.append("Category is required")
    elif str(data["category"]).strip() not in CATEGORIES:
        errors.append(f"Category must be one of: {', '.join(CATEGORIES)}")

    if not is_non_negative_integer(data.get("stock")):
        errors.append("Stock must be a non-negative whole number")

    cost_ok = is_valid_price(data.get("cost"))
    price_ok = is_valid_price(data.get("price"))

    if not cost_ok:
        errors.append("Cost must be a positive number")

    if not price_ok:
        errors.append("Price must be a positive number")

    if cost_ok and price_ok and float(data["price"]) <= float(data["cost"]):
        errors.append("Selling price must be greater than cost")

    return ValidationResult(valid=not errors, errors=errors)


def validate_sale(data: Mapping[str, Any], available_stock: int) -> ValidationResult:
    """Validates a sale request against the product's current stock."""
    errors = []

    if not is_required(data.get("product_id")):
        errors.append("A product must be selected")

    quantity = data.get("quantity")
    if not is_positive_integer(quantity):
        errors.append("Quantity must be a positive whole number")
    elif not has_sufficient_stock(available_stock, int(float(quantity))):
        errors.append(f"Insufficient stock. Only {available_stock} units available")

    return ValidationResult(valid=not errors, errors=errors)
