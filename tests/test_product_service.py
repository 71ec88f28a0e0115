from __future__ import annotations

from decimal import Decimal

import pytest

from catalog_api.app.core import metrics as m
from catalog_api.app.core.exceptions import InvalidArgumentError, NotFoundError
from catalog_api.app.repositories import ProductRepository
from catalog_api.app.schemas.product import ProductCreate
from catalog_api.app.services.product_service import ProductService

from conftest import SpyCounter, SpyRepository


def test_create_defaults_quantity_to_zero(product_service: ProductService, counters: SpyCounter) -> None:
    product = product_service.create_product(ProductCreate(name="Widget", price=Decimal("9.99")))

    assert product.id is not None
    assert product.quantity == 0
    assert product.price == Decimal("9.99")
    assert product.created_at is not None
    assert product_service.get_product(product.id) == product
    assert counters.count(m.PRODUCTS_CREATED) == 1


def test_price_keeps_exact_decimal_value(product_service: ProductService) -> None:
    product = product_service.create_product(ProductCreate(name="Bolt", price=Decimal("0.10"), quantity=3))

    stored = product_service.get_product(product.id)

    assert stored.price == Decimal("0.10")
    assert stored.quantity == 3


def test_update_replaces_all_mutable_fields(product_service: ProductService, counters: SpyCounter) -> None:
    created = product_service.create_product(
        ProductCreate(name="Widget", description="Small", price=Decimal("9.99"), quantity=5, category="Tools")
    )

    updated = product_service.update_product(created.id, ProductCreate(name="Gadget", price=Decimal("12.50")))

    assert updated.name == "Gadget"
    assert updated.description is None
    assert updated.category is None
    assert updated.quantity == 0
    assert updated.price == Decimal("12.50")
    assert updated.created_at == created.created_at
    assert updated.updated_at is not None and updated.updated_at >= created.created_at
    assert counters.count(m.PRODUCTS_UPDATED) == 1


def test_update_missing_product(product_service: ProductService, counters: SpyCounter) -> None:
    with pytest.raises(NotFoundError):
        product_service.update_product(7, ProductCreate(name="Ghost", price=Decimal("1")))

    assert counters.count(m.PRODUCTS_NOT_FOUND) == 1


def test_get_missing_product_counts_not_found(product_service: ProductService, counters: SpyCounter) -> None:
    with pytest.raises(NotFoundError) as exc:
        product_service.get_product(1)

    assert str(exc.value) == "Product not found"
    assert counters.count(m.PRODUCTS_NOT_FOUND) == 1


def test_delete_lifecycle(product_service: ProductService, counters: SpyCounter) -> None:
    product = product_service.create_product(ProductCreate(name="Widget", price=Decimal("9.99")))

    product_service.delete_product(product.id)
    with pytest.raises(NotFoundError):
        product_service.delete_product(product.id)

    assert counters.count(m.PRODUCTS_DELETED) == 1
    assert counters.count(m.PRODUCTS_NOT_FOUND) == 1


class _StaleProductRepository(ProductRepository):
    """Existence check that still sees a row another request already deleted."""

    def exists_by_id(self, entity_id: int) -> bool:
        return True


def test_delete_lost_to_concurrent_delete_is_not_found(database_path: str, counters: SpyCounter) -> None:
    service = ProductService(_StaleProductRepository(database_path), counters)

    with pytest.raises(NotFoundError):
        service.delete_product(42)

    assert counters.count(m.PRODUCTS_DELETED) == 0
    assert counters.count(m.PRODUCTS_NOT_FOUND) == 1


@pytest.mark.parametrize("product_id", [0, -5])
def test_delete_with_non_positive_id_never_touches_store(product_id: int) -> None:
    repository = SpyRepository()
    counters = SpyCounter()
    service = ProductService(repository, counters)

    with pytest.raises(InvalidArgumentError):
        service.delete_product(product_id)

    assert repository.calls == []
    assert counters.names == []


def test_list_filters_by_name(product_service: ProductService) -> None:
    for name in ("Blue Widget", "widget XL", "Hammer"):
        product_service.create_product(ProductCreate(name=name, price=Decimal("1.00")))

    page = product_service.list_products(0, 10, "WIDGET")
    everything = product_service.list_products(0, 2)

    assert [p.name for p in page.content] == ["Blue Widget", "widget XL"]
    assert everything.total_elements == 3
    assert everything.total_pages == 2
    assert len(everything.content) == 2


def test_page_beyond_the_end_is_empty(product_service: ProductService) -> None:
    product_service.create_product(ProductCreate(name="Only", price=Decimal("1.00")))

    page = product_service.list_products(5, 10)

    assert page.content == []
    assert page.total_elements == 1
    assert page.total_pages == 1
