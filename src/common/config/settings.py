"""Application settings and environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


class Settings:
    # Storage backend: "local" (JSON file) or "remote" (HTTP document store)
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "local")
    LOCAL_STORAGE_PATH: str = os.getenv("LOCAL_STORAGE_PATH", "inventory_data.json")

    REMOTE_STORE_BASE_URL: Optional[str] = os.getenv("REMOTE_STORE_BASE_URL")
    REMOTE_STORE_TOKEN: Optional[str] = os.getenv("REMOTE_STORE_TOKEN")
    REMOTE_STORE_TIMEOUT: int = int(os.getenv("REMOTE_STORE_TIMEOUT", "30"))

    # Stock level boundaries: high > HIGH, medium > MEDIUM, low > 0, out == 0
    STOCK_LEVEL_HIGH: int = int(os.getenv("STOCK_LEVEL_HIGH", "30"))
    STOCK_LEVEL_MEDIUM: int = int(os.getenv("STOCK_LEVEL_MEDIUM", "10"))

    TIMEZONE: str = os.getenv("TIMEZONE", "UTC")  # Used for "today" and daily trend buckets
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL


settings = Settings()
