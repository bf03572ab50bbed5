import pytest

from app.config.database import transaction
from app.core.exceptions import InsufficientStockError, NotFoundError
from app.shared.services.inventory_service import InventoryService


def test_check_availability_reports_without_mutating(db, make_product, stock_of):
    product = make_product(stock=5)

    ok = InventoryService.check_availability(db, product.id, 5)
    short = InventoryService.check_availability(db, product.id, 6)

    assert ok.ok
    assert not short.ok
    assert short.available == 5
    assert short.requested == 6
    assert stock_of(product.id) == 5


def test_check_availability_unknown_product(db):
    with pytest.raises(NotFoundError):
        InventoryService.check_availability(db, "no-existe", 1)


def test_decrement_reduces_stock(db, make_product, stock_of):
    product = make_product(stock=5)

    with transaction(db):
        InventoryService.decrement(db, product.id, 3)

    assert stock_of(product.id) == 2


def test_decrement_to_exactly_zero(db, make_product, stock_of):
    product = make_product(stock=4)

    with transaction(db):
        InventoryService.decrement(db, product.id, 4)

    assert stock_of(product.id) == 0


def test_decrement_past_zero_fails_instead_of_clamping(db, make_product, stock_of):
    product = make_product(name="Batería Samsung A10", stock=2)

    with pytest.raises(InsufficientStockError) as exc_info:
        with transaction(db):
            InventoryService.decrement(db, product.id, 3)

    assert exc_info.value.product_name == "Batería Samsung A10"
    assert exc_info.value.available == 2
    assert exc_info.value.requested == 3
    assert stock_of(product.id) == 2


def test_failed_decrement_rolls_back_earlier_decrements(db, make_product, stock_of):
    first = make_product(stock=5)
    second = make_product(stock=1)

    with pytest.raises(InsufficientStockError):
        with transaction(db):
            InventoryService.decrement(db, first.id, 2)
            InventoryService.decrement(db, second.id, 2)

    assert stock_of(first.id) == 5
    assert stock_of(second.id) == 1


def test_decrement_rejects_non_positive_quantity(db, make_product):
    product = make_product(stock=5)

    with pytest.raises(ValueError):
        InventoryService.decrement(db, product.id, 0)


def test_increment_has_no_upper_bound(db, make_product, stock_of):
    product = make_product(stock=5)

    with transaction(db):
        InventoryService.increment(db, product.id, 1000)

    assert stock_of(product.id) == 1005


def test_increment_unknown_product(db):
    with pytest.raises(NotFoundError):
        with transaction(db):
            InventoryService.increment(db, "no-existe", 1)


def test_adjust_in_both_directions(db, make_product, stock_of):
    product = make_product(stock=5)

    with transaction(db):
        InventoryService.adjust(db, product.id, 3)
    assert stock_of(product.id) == 8

    with transaction(db):
        InventoryService.adjust(db, product.id, -8)
    assert stock_of(product.id) == 0

    with pytest.raises(InsufficientStockError):
        with transaction(db):
            InventoryService.adjust(db, product.id, -1)
    assert stock_of(product.id) == 0


def test_lock_products_returns_only_existing(db, make_product):
    a = make_product()
    b = make_product()

    products = InventoryService.lock_products(db, [a.id, "no-existe", b.id, a.id])

    assert set(products) == {a.id, b.id}
    db.rollback()


def test_lock_products_with_no_ids(db):
    assert InventoryService.lock_products(db, []) == {}
