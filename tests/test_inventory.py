import pytest
from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from stockledger.core.exceptions import (
    InsufficientStockError,
    InsufficientStockForSaleError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from stockledger.models.products import Product
from stockledger.models.stock_transactions import StockTransaction
from stockledger.schemas.inventory import StockAdjustmentCreate
from stockledger.schemas.sale import SaleCreate
from stockledger.services.inventory import adjust_stock, record_adjustment
from stockledger.services.sales import record_sale


def _ledger_total(db, product):
    return (
        db.query(func.coalesce(func.sum(StockTransaction.quantity_change), 0))
        .filter(StockTransaction.product_id == product.id)
        .scalar()
    )


def test_adjust_stock_decrements_and_appends_one_row(db, laptop):
    before = db.query(StockTransaction).count()

    product = adjust_stock(db, laptop.id, 3)

    assert product.quantity == 7
    assert db.query(StockTransaction).count() == before + 1

    last = db.query(StockTransaction).order_by(StockTransaction.id.desc()).first()
    assert last.product_id == laptop.id
    assert last.quantity_change == -3
    assert last.transaction_type == "sale"


def test_adjust_stock_rejects_more_than_on_hand(db, laptop):
    with pytest.raises(InsufficientStockError) as exc_info:
        adjust_stock(db, laptop.id, 11)

    assert not isinstance(exc_info.value, InsufficientStockForSaleError)
    assert "Insufficient stock for update" in exc_info.value.message

    db.refresh(laptop)
    assert laptop.quantity == 10
    assert _ledger_total(db, laptop) == 10


@pytest.mark.parametrize("quantity", [0, -1])
def test_adjust_stock_requires_positive_quantity(db, laptop, quantity):
    with pytest.raises(InvalidQuantityError):
        adjust_stock(db, laptop.id, quantity)


def test_adjust_stock_unknown_product(db):
    with pytest.raises(ProductNotFoundError):
        adjust_stock(db, 42, 1)


def test_restock_and_write_off(db, laptop):
    entry = record_adjustment(db, StockAdjustmentCreate(product_id=laptop.id, quantity_change=5))

    assert entry.quantity_change == 5
    assert entry.transaction_type == "adjustment"
    assert entry.sale_id is None

    record_adjustment(db, StockAdjustmentCreate(product_id=laptop.id, quantity_change=-4))

    db.refresh(laptop)
    assert laptop.quantity == 11
    assert _ledger_total(db, laptop) == 11


def test_write_off_below_zero_is_rejected(db, laptop):
    with pytest.raises(InsufficientStockError):
        record_adjustment(db, StockAdjustmentCreate(product_id=laptop.id, quantity_change=-11))

    db.refresh(laptop)
    assert laptop.quantity == 10


def test_zero_adjustment_fails_validation():
    with pytest.raises(ValidationError):
        StockAdjustmentCreate(product_id=1, quantity_change=0)


def test_guard_rejects_negative_quantity_on_update(db, laptop):
    laptop.quantity = -1

    with pytest.raises(InsufficientStockError) as exc_info:
        db.commit()

    assert exc_info.value.available == 10

    db.rollback()
    db.refresh(laptop)
    assert laptop.quantity == 10


def test_check_constraint_backs_up_bulk_updates(db, laptop):
    # Bulk updates skip mapper events; the database constraint still applies
    with pytest.raises(IntegrityError):
        db.query(Product).filter(Product.id == laptop.id).update(
            {Product.quantity: -5}, synchronize_session=False
        )
        db.flush()

    db.rollback()
    db.refresh(laptop)
    assert laptop.quantity == 10


def test_quantity_never_negative_and_ledger_matches(db, laptop):
    operations = [
        ("sale", 4),
        ("sale", 7),
        ("adjust", -3),
        ("adjust", 2),
        ("sale", 6),
        ("adjust", -8),
        ("sale", 5),
        ("adjust", 1),
    ]

    for kind, amount in operations:
        try:
            if kind == "sale":
                record_sale(db, SaleCreate(product_id=laptop.id, quantity_sold=amount))
            else:
                record_adjustment(
                    db, StockAdjustmentCreate(product_id=laptop.id, quantity_change=amount)
                )
        except InsufficientStockError:
            pass

        db.refresh(laptop)
        assert laptop.quantity >= 0
        assert _ledger_total(db, laptop) == laptop.quantity

    assert db.query(Product).filter(Product.quantity < 0).count() == 0
