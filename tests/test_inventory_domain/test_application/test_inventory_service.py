import logging

import pytest

from src.common.dtos.inventory_dtos import ProductUpdateDTO
from src.common.events.event_bus import DomainEvent
from src.common.exceptions.custom_exceptions import StorageError
from src.inventory_domain.application.inventory_service import InventoryService
from src.inventory_domain.domain.entities.product import Product
from src.inventory_domain.domain.services.sample_catalog import SAMPLE_PRODUCTS


def test_add_product_stores_and_emits(inventory_service, sample_product_data, recorded_events) -> None:
    result = inventory_service.add_product(sample_product_data)

    assert result.success is True
    assert result.data.id
    assert inventory_service.get_product(result.data.id) == result.data
    assert recorded_events == [(DomainEvent.PRODUCT_ADDED, result.data), (DomainEvent.DATA_CHANGED, None)]


def test_add_product_rejects_invalid_data(inventory_service, sample_product_data, recorded_events) -> None:
    sample_product_data.update({"name": "", "price": 4})

    result = inventory_service.add_product(sample_product_data)

    assert result.success is False
    assert result.errors == ["Product name is required", "Selling price must be greater than cost"]
    assert inventory_service.get_all_products() == []
    assert recorded_events == []


def test_add_product_reports_storage_failure(event_bus, mock_product_repository, sample_product_data) -> None:
    mock_product_repository.create.side_effect = StorageError("disk full")
    service = InventoryService(product_repo=mock_product_repository, event_bus=event_bus)

    result = service.add_product(sample_product_data)

    assert result.success is False
    assert result.errors == ["Operation failed: Storage Error: disk full"]


def test_update_product_validates_merged_result(inventory_service, stored_product) -> None:
    result = inventory_service.update_product(stored_product.id, ProductUpdateDTO(cost=15))

    assert result.success is False
    assert result.errors == ["Selling price must be greater than cost"]
    assert inventory_service.get_product(stored_product.id).cost == 5


def test_update_product(inventory_service, stored_product, recorded_events) -> None:
    result = inventory_service.update_product(stored_product.id, ProductUpdateDTO(name="Linen Shirt XL", price=12))

    assert result.success is True
    assert (result.data.name, result.data.price) == ("Linen Shirt XL", 12)
    assert [event for event, _ in recorded_events] == [DomainEvent.PRODUCT_UPDATED, DomainEvent.DATA_CHANGED]


def test_update_unknown_product(inventory_service) -> None:
    result = inventory_service.update_product("missing", ProductUpdateDTO(stock=1))

    assert result.errors == ["Product not found"]


def test_delete_product(inventory_service, stored_product, recorded_events) -> None:
    assert inventory_service.delete_product(stored_product.id).success is True
    assert recorded_events[0] == (DomainEvent.PRODUCT_DELETED, stored_product.id)

    result = inventory_service.delete_product(stored_product.id)
    assert result.errors == ["Product not found"]


def test_reduce_stock_never_goes_negative(inventory_service, stored_product) -> None:
    """Stock reductions larger than the stock are refused."""
    assert inventory_service.reduce_stock(stored_product.id, 4).data.stock == 6

    result = inventory_service.reduce_stock(stored_product.id, 7)

    assert result.errors == ["Insufficient stock. Only 6 units available"]
    assert inventory_service.get_product(stored_product.id).stock == 6


@pytest.mark.parametrize("quantity", [0, -1, 1.5])
def test_reduce_stock_rejects_bad_quantity(inventory_service, stored_product, quantity) -> None:
    assert inventory_service.reduce_stock(stored_product.id, quantity).success is False


def test_restock(inventory_service, stored_product) -> None:
    result = inventory_service.restock(stored_product.id, 5)

    assert result.data.stock == 15
    assert inventory_service.restock("missing", 5).errors == ["Product not found"]


def test_inventory_totals(inventory_service, stored_product, stored_jacket) -> None:
    assert inventory_service.get_total_inventory_value() == 10 * 5 + 40 * 20
    assert inventory_service.get_total_potential_revenue() == 10 * 10 + 40 * 50
    assert inventory_service.get_total_stock() == 50


def test_stock_alerts(inventory_service, product_repo) -> None:
    low = product_repo.create(Product(name="Belt", category="Accessories", stock=2, cost=1, price=3))
    out = product_repo.create(Product(name="Cap", category="Accessories", stock=0, cost=1, price=3))

    assert inventory_service.get_stock_alerts() == {"low_stock": [low], "out_of_stock": [out]}


def test_lookups(inventory_service, stored_product, stored_jacket) -> None:
    assert inventory_service.get_products_by_category("T-Shirts") == [stored_product]
    assert inventory_service.search_products("jack") == [stored_jacket]


def test_initialize_if_empty_seeds_once(inventory_service, recorded_events) -> None:
    assert inventory_service.initialize_if_empty() is True
    assert len(inventory_service.get_all_products()) == len(SAMPLE_PRODUCTS)
    assert recorded_events == [(DomainEvent.DATA_CHANGED, None)]

    assert inventory_service.initialize_if_empty() is False
    assert len(inventory_service.get_all_products()) == len(SAMPLE_PRODUCTS)


def test_add_product_rejects_unknown_category(inventory_service, sample_product_data, recorded_events) -> None:
    """A product outside the fixed category list is refused and nothing is stored."""
    sample_product_data.update({"name": "Rocket", "category": "Spaceships", "stock": 1, "cost": 1, "price": 2})

    result = inventory_service.add_product(sample_product_data)

    assert result.success is False
    assert result.errors == ["Category must be one of: T-Shirts, Trousers, Dresses, Jackets, Accessories"]
    assert inventory_service.get_all_products() == []
    assert recorded_events == []


def test_update_product_rejects_unknown_category(inventory_service, stored_product) -> None:
    result = inventory_service.update_product(stored_product.id, ProductUpdateDTO(category="Spaceships"))

    assert result.success is False
    assert inventory_service.get_product(stored_product.id).category == "T-Shirts"


def test_stock_changes_are_logged(inventory_service, stored_product, caplog) -> None:
    """Updates, reductions and restocks are logged like additions and deletions."""
    caplog.set_level(logging.INFO, logger="src.inventory_domain.application.inventory_service")

    inventory_service.update_product(stored_product.id, ProductUpdateDTO(price=12))
    inventory_service.reduce_stock(stored_product.id, 2)
    inventory_service.restock(stored_product.id, 5)

    assert f"Product updated: Linen Shirt ({stored_product.id})" in caplog.text
    assert "Stock of Linen Shirt reduced by 2 to 8" in caplog.text
    assert "Restocked Linen Shirt with 5 units, stock now 13" in caplog.text
