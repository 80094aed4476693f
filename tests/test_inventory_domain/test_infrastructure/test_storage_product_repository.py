import pytest

from src.common.dtos.inventory_dtos import ProductUpdateDTO
from src.common.exceptions.custom_exceptions import InsufficientStockError, StorageError
from src.inventory_domain.domain.entities.product import Product
from src.inventory_domain.domain.services.sample_catalog import SAMPLE_PRODUCTS


def test_create_assigns_id_and_get_by_id(product_repo) -> None:
    created = product_repo.create(Product(name="Wool Scarf", category="Accessories", stock=4, cost=3, price=9))

    assert created.id
    assert product_repo.get_by_id(created.id) == created
    assert product_repo.count() == 1


def test_get_by_id_unknown_returns_none(product_repo) -> None:
    assert product_repo.get_by_id("missing") is None
    assert product_repo.exists("missing") is False


def test_update_changes_only_given_fields(product_repo, stored_product) -> None:
    updated = product_repo.update(stored_product.id, ProductUpdateDTO(price=12.5))

    assert updated.price == 12.5
    assert updated.name == stored_product.name
    assert updated.created_at == stored_product.created_at


def test_update_unknown_returns_none(product_repo) -> None:
    assert product_repo.update("missing", ProductUpdateDTO(stock=2)) is None


def test_delete(product_repo, stored_product) -> None:
    assert product_repo.delete(stored_product.id) is True
    assert product_repo.delete(stored_product.id) is False
    assert product_repo.get_all() == []


def test_get_by_category_and_search(product_repo, stored_product, stored_jacket) -> None:
    assert product_repo.get_by_category("Jackets") == [stored_jacket]
    assert product_repo.search("rain") == [stored_jacket]
    assert product_repo.search("SHIRT") == [stored_product]


def test_low_and_out_of_stock(product_repo) -> None:
    low = product_repo.create(Product(name="Belt", category="Accessories", stock=2, cost=1, price=3))
    out = product_repo.create(Product(name="Cap", category="Accessories", stock=0, cost=1, price=3))
    product_repo.create(Product(name="Coat", category="Jackets", stock=50, cost=1, price=3))

    assert product_repo.get_low_stock() == [low]
    assert product_repo.get_out_of_stock() == [out]


def test_reduce_stock(product_repo, stored_product) -> None:
    updated = product_repo.reduce_stock(stored_product.id, 3)

    assert updated.stock == 7
    with pytest.raises(InsufficientStockError):
        product_repo.reduce_stock(stored_product.id, 8)
    assert product_repo.get_by_id(stored_product.id).stock == 7


def test_stock_operation_targets_product(product_repo, stored_product) -> None:
    operation = product_repo.stock_operation(stored_product.id, 4)

    assert (operation.kind, operation.collection, operation.record_id) == ("update", "products", stored_product.id)
    assert operation.data == {"stock": 4}


def test_initialize_sample_data(product_repo) -> None:
    created = product_repo.initialize_sample_data()

    assert len(created) == len(SAMPLE_PRODUCTS)
    assert product_repo.count() == len(SAMPLE_PRODUCTS)


def test_malformed_records_are_skipped(product_repo, local_storage, stored_product) -> None:
    local_storage.insert("products", {"name": "Broken", "stock": "lots"})

    assert product_repo.get_all() == [stored_product]


def test_reads_degrade_when_storage_fails(product_repo, local_storage, mocker) -> None:
    mocker.patch.object(local_storage, "load", side_effect=StorageError("unreadable"))
    mocker.patch.object(local_storage, "get", side_effect=StorageError("unreadable"))
    mocker.patch.object(local_storage, "count", side_effect=StorageError("unreadable"))

    assert product_repo.get_all() == []
    assert product_repo.get_by_id("p1") is None
    assert product_repo.count() == 0


def test_writes_propagate_storage_errors(product_repo, local_storage, mocker) -> None:
    mocker.patch.object(local_storage, "insert", side_effect=StorageError("disk full"))

    with pytest.raises(StorageError):
        product_repo.create(Product(name="Belt", category="Accessories", stock=2, cost=1, price=3))
