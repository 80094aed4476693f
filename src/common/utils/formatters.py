"""Display formatting helpers used by the console controller."""

from datetime import datetime

from src.common.config.settings import settings
from src.common.utils.date_utils import get_timezone, parse_datetime


def format_currency(amount: float, currency: str | None = None) -> str:
    symbol = settings.CURRENCY_SYMBOL if currency is None else currency
    return f"{symbol}{amount:,.2f}"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_number(value: float) -> str:
    return f"{value:,}"


def format_date(dt: datetime) -> str:
    return parse_datetime(dt).astimezone(get_timezone()).strftime("%Y-%m-%d")


def format_datetime(dt: datetime) -> str:
    return parse_datetime(dt).astimezone(get_timezone()).strftime("%Y-%m-%d %H:%M")


def truncate_text(text: str, max_length: int = 50) -> str:
    """Shortens text to ``max_length`` characters followed by an ellipsis."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
