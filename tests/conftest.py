# tests/conftest.py
from datetime import datetime
from unittest.mock import Mock

import pytest
import pytz

from src.analytics_domain.application.analytics_service import AnalyticsService
from src.common.config.settings import settings
from src.common.events.event_bus import DomainEvent, EventBus
from src.common.persistence.local_storage_adapter import LocalStorageAdapter
from src.inventory_domain.application.inventory_service import InventoryService
from src.inventory_domain.domain.entities.product import Product
from src.inventory_domain.infrastructure.persistence.storage_product_repository import (
    StorageProductRepository,
)
from src.sales_domain.application.sales_service import SalesService
from src.sales_domain.domain.entities.sale import Sale
from src.sales_domain.infrastructure.persistence.storage_sale_repository import (
    StorageSaleRepository,
)


@pytest.fixture(autouse=True)
def mock_settings_defaults(mocker) -> None:
    """Pins thresholds and time zone so tests do not depend on the local .env."""
    mocker.patch.object(settings, "STOCK_LEVEL_HIGH", 30)
    mocker.patch.object(settings, "STOCK_LEVEL_MEDIUM", 10)
    mocker.patch.object(settings, "TIMEZONE", "UTC")
    mocker.patch.object(settings, "CURRENCY_SYMBOL", "$")


@pytest.fixture
def local_storage(tmp_path) -> LocalStorageAdapter:
    """Opened LocalStorageAdapter writing to a temp file."""
    storage = LocalStorageAdapter(str(tmp_path / "inventory_data.json"))
    storage.open()
    yield storage
    storage.close()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorded_events(event_bus) -> list:
    """Every (event, payload) emitted on the shared bus, in order."""
    events = []
    for event in DomainEvent:
        event_bus.subscribe(event, lambda e, payload: events.append((e, payload)))
    return events


@pytest.fixture
def product_repo(local_storage) -> StorageProductRepository:
    return StorageProductRepository(local_storage)


@pytest.fixture
def sale_repo(local_storage) -> StorageSaleRepository:
    return StorageSaleRepository(local_storage)


@pytest.fixture
def inventory_service(product_repo, event_bus) -> InventoryService:
    return InventoryService(product_repo=product_repo, event_bus=event_bus)


@pytest.fixture
def sales_service(product_repo, sale_repo, local_storage, event_bus) -> SalesService:
    return SalesService(product_repo=product_repo, sale_repo=sale_repo, storage=local_storage, event_bus=event_bus)


@pytest.fixture
def analytics_service(product_repo, sale_repo) -> AnalyticsService:
    return AnalyticsService(product_repo=product_repo, sale_repo=sale_repo)


@pytest.fixture
def mock_product_repository() -> Mock:
    """Mock for StorageProductRepository."""
    return Mock(spec=StorageProductRepository)


@pytest.fixture
def mock_sale_repository() -> Mock:
    """Mock for StorageSaleRepository."""
    return Mock(spec=StorageSaleRepository)


@pytest.fixture
def sample_product_data() -> dict:
    """Valid input for InventoryService.add_product."""
    return {"name": "Linen Shirt", "category": "T-Shirts", "stock": 10, "cost": 5, "price": 10}


@pytest.fixture
def stored_product(product_repo) -> Product:
    """Product with stock 10, cost 5 and price 10 already in storage."""
    return product_repo.create(Product(name="Linen Shirt", category="T-Shirts", stock=10, cost=5, price=10))


@pytest.fixture
def stored_jacket(product_repo) -> Product:
    return product_repo.create(Product(name="Rain Jacket", category="Jackets", stock=40, cost=20, price=50))


@pytest.fixture
def fixed_sale_date() -> datetime:
    return datetime(2025, 12, 28, 10, 30, tzinfo=pytz.utc)


@pytest.fixture
def make_sale(sale_repo):
    """Stores a sale directly, bypassing stock handling."""

    def _make_sale(product: Product, quantity: int, date: datetime | None = None) -> Sale:
        return sale_repo.create(
            Sale(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                price=product.price,
                cost=product.cost,
                date=date,
            )
        )

    return _make_sale
