"""Main application entry point for the inventory and sales tracker."""

import logging
from dataclasses import dataclass

from src.analytics_domain.application.analytics_service import AnalyticsService
from src.common.config.constants import VIEWS
from src.common.config.settings import settings
from src.common.events.event_bus import EventBus
from src.common.exceptions.custom_exceptions import APIError, ApplicationError, StorageError
from src.common.logger_config import setup_logging
from src.common.persistence.local_storage_adapter import LocalStorageAdapter
from src.common.persistence.remote_document_store import RemoteDocumentStoreClient
from src.common.persistence.storage_adapter import IStorageAdapter
from src.inventory_domain.application.inventory_service import InventoryService
from src.inventory_domain.infrastructure.persistence.storage_product_repository import (
    StorageProductRepository,
)
from src.presentation.console_controller import ConsoleController
from src.sales_domain.application.sales_service import SalesService
from src.sales_domain.infrastructure.persistence.storage_sale_repository import (
    StorageSaleRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    storage: IStorageAdapter
    event_bus: EventBus
    inventory_service: InventoryService
    sales_service: SalesService
    analytics_service: AnalyticsService


def create_storage_adapter() -> IStorageAdapter:
    """Chooses the storage backend from settings."""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "local":
        return LocalStorageAdapter(settings.LOCAL_STORAGE_PATH)
    if backend == "remote":
        return RemoteDocumentStoreClient()
    raise ApplicationError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}' (expected 'local' or 'remote')")


def setup_dependencies(storage: IStorageAdapter) -> AppServices:
    """Initializes and wires up repositories and services around one storage adapter."""
    event_bus = EventBus()
    product_repo = StorageProductRepository(storage)
    sale_repo = StorageSaleRepository(storage)
    return AppServices(
        storage=storage,
        event_bus=event_bus,
        inventory_service=InventoryService(product_repo=product_repo, event_bus=event_bus),
        sales_service=SalesService(
            product_repo=product_repo, sale_repo=sale_repo, storage=storage, event_bus=event_bus
        ),
        analytics_service=AnalyticsService(product_repo=product_repo, sale_repo=sale_repo),
    )


def run() -> None:
    """Opens storage, seeds sample data if empty and renders every view once."""
    storage = create_storage_adapter()
    logger.info(f"Using {settings.STORAGE_BACKEND} storage backend")

    try:
        with storage:
            services = setup_dependencies(storage)
            services.inventory_service.initialize_if_empty()
            services.sales_service.initialize_if_empty()

            controller = ConsoleController(
                services.inventory_service,
                services.sales_service,
                services.analytics_service,
                services.event_bus,
            )
            controller.start()
            for view in VIEWS:
                controller.show(view)
            controller.stop()
    except (APIError, StorageError, ApplicationError) as e:
        logger.error(f"❌ {e}")


if __name__ == "__main__":
    setup_logging()
    run()
