from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from stockledger.core.exceptions import (
    DuplicateRecordError,
    ProductNotFoundError,
    SupplierNotFoundError,
)
from stockledger.models.products import Product
from stockledger.models.stock_transactions import StockTransaction
from stockledger.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from stockledger.schemas.sale import SaleCreate
from stockledger.schemas.supplier import SupplierCreate, SupplierResponse
from stockledger.services.catalogue import (
    create_product,
    create_supplier,
    get_product,
    get_supplier,
    list_products,
    list_suppliers,
    update_product,
)
from stockledger.services.sales import record_sale


def test_create_supplier(db, supplier):
    assert supplier.id is not None
    assert get_supplier(db, supplier.id).email == "alice@techdistributors.com"
    assert SupplierResponse.model_validate(supplier).name == "Tech Distributors Ltd"


def test_duplicate_supplier_name(db, supplier):
    with pytest.raises(DuplicateRecordError):
        create_supplier(db, SupplierCreate(name="Tech Distributors Ltd"))


def test_supplier_email_is_validated():
    with pytest.raises(ValidationError):
        SupplierCreate(name="Broken Mail Co", email="not-an-email")


def test_list_suppliers_sorted_by_name(db, supplier):
    create_supplier(db, SupplierCreate(name="Gadget World"))

    assert [s.name for s in list_suppliers(db)] == ["Gadget World", "Tech Distributors Ltd"]


def test_get_unknown_supplier(db):
    with pytest.raises(SupplierNotFoundError):
        get_supplier(db, 404)


def test_opening_stock_is_recorded_in_ledger(db, laptop):
    entries = db.query(StockTransaction).filter(StockTransaction.product_id == laptop.id).all()

    assert laptop.quantity == 10
    assert len(entries) == 1
    assert entries[0].quantity_change == 10
    assert entries[0].transaction_type == "adjustment"


def test_product_without_opening_stock_has_empty_ledger(db, make_product):
    product = make_product(name="Monitor", quantity=0, price="199.00")

    assert product.quantity == 0
    assert db.query(StockTransaction).count() == 0


def test_product_response(laptop):
    response = ProductResponse.model_validate(laptop)

    assert response.name == "Laptop"
    assert response.price == Decimal("999.99")
    assert response.quantity == 10


def test_create_product_with_unknown_supplier(db):
    with pytest.raises(SupplierNotFoundError):
        create_product(
            db,
            ProductCreate(name="Ghost", price=Decimal("1.00"), supplier_id=123),
        )

    assert db.query(Product).count() == 0


def test_duplicate_product_name(db, laptop, supplier):
    with pytest.raises(DuplicateRecordError):
        create_product(
            db,
            ProductCreate(name="Laptop", price=Decimal("10.00"), supplier_id=supplier.id),
        )


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Bad Price", "price": Decimal("0")},
        {"name": "Negative Stock", "price": Decimal("5.00"), "quantity": -1},
        {"name": "", "price": Decimal("5.00")},
    ],
)
def test_product_create_validation(payload):
    with pytest.raises(ValidationError):
        ProductCreate(**payload)


def test_update_product_fields(db, laptop):
    updated = update_product(
        db,
        laptop.id,
        ProductUpdate(price=Decimal("899.50"), category="Computers"),
    )

    assert updated.price == Decimal("899.50")
    assert updated.category == "Computers"
    assert updated.name == "Laptop"
    assert updated.quantity == 10


def test_update_product_can_detach_supplier(db, laptop):
    updated = update_product(db, laptop.id, ProductUpdate(supplier_id=None))

    assert updated.supplier_id is None


def test_update_product_to_taken_name(db, laptop, make_product):
    mouse = make_product(name="Wireless Mouse", quantity=5, price="19.99")

    with pytest.raises(DuplicateRecordError):
        update_product(db, mouse.id, ProductUpdate(name="Laptop"))


def test_update_unknown_product(db):
    with pytest.raises(ProductNotFoundError):
        update_product(db, 77, ProductUpdate(name="Nothing"))


def test_list_and_get_products(db, laptop, make_product):
    mouse = make_product(name="Wireless Mouse", quantity=5, price="19.99")

    assert [p.id for p in list_products(db)] == [laptop.id, mouse.id]
    assert get_product(db, mouse.id).name == "Wireless Mouse"


def test_supplier_with_products_cannot_be_deleted(db, laptop, supplier):
    db.delete(supplier)

    with pytest.raises(IntegrityError):
        db.commit()

    db.rollback()
    assert get_supplier(db, supplier.id).name == "Tech Distributors Ltd"


def test_product_with_sales_cannot_be_deleted(db, laptop):
    record_sale(db, SaleCreate(product_id=laptop.id, quantity_sold=1))

    db.delete(laptop)

    with pytest.raises(IntegrityError):
        db.commit()

    db.rollback()
    assert get_product(db, laptop.id).quantity == 9
