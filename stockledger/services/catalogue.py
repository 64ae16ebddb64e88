# stockledger/services/catalogue.py

import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from stockledger.core.exceptions import (
    DuplicateRecordError,
    ProductNotFoundError,
    StockLedgerError,
    SupplierNotFoundError,
)
from stockledger.models.products import Product
from stockledger.models.suppliers import Supplier
from stockledger.schemas.product import ProductCreate, ProductUpdate
from stockledger.schemas.supplier import SupplierCreate
from stockledger.services.inventory import apply_stock_delta

logger = logging.getLogger("stockledger.catalogue")


# SUPPLIERS

def create_supplier(db: Session, supplier_data: SupplierCreate) -> Supplier:
    existing_supplier = (
        db.query(Supplier)
        .filter(Supplier.name == supplier_data.name)
        .first()
    )
    if existing_supplier:
        raise DuplicateRecordError("Supplier with this name already exists")

    supplier = Supplier(
        name=supplier_data.name,
        contact_name=supplier_data.contact_name,
        email=str(supplier_data.email) if supplier_data.email else None,
        address=supplier_data.address,
    )

    try:
        db.add(supplier)
        db.commit()

    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Unable to create supplier {supplier_data.name}")
        raise

    db.refresh(supplier)

    logger.info(f"Supplier created: {supplier.id} {supplier.name}")

    return supplier


def get_supplier(db: Session, supplier_id: int) -> Supplier:
    supplier = db.query(Supplier).filter(Supplier.id == supplier_id).first()

    if not supplier:
        raise SupplierNotFoundError(f"Supplier {supplier_id} not found")

    return supplier


def list_suppliers(db: Session):
    return db.query(Supplier).order_by(Supplier.name).all()


# PRODUCTS

def create_product(db: Session, product_data: ProductCreate) -> Product:
    # Prevent duplicate product names
    existing_product = (
        db.query(Product)
        .filter(Product.name == product_data.name)
        .first()
    )
    if existing_product:
        raise DuplicateRecordError("Product with this name already exists")

    if product_data.supplier_id is not None:
        get_supplier(db, product_data.supplier_id)

    product = Product(
        name=product_data.name,
        category=product_data.category,
        price=product_data.price,
        quantity=0,
        supplier_id=product_data.supplier_id,
    )

    try:
        db.add(product)
        db.flush()

        # Opening stock goes through the ledger so it always sums to quantity
        if product_data.quantity:
            apply_stock_delta(db, product, product_data.quantity)

        db.commit()

    except (StockLedgerError, SQLAlchemyError):
        db.rollback()
        logger.exception(f"Unable to create product {product_data.name}")
        raise

    db.refresh(product)

    logger.info(f"Product created: {product.id} {product.name} qty={product.quantity}")

    return product


def get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()

    if not product:
        raise ProductNotFoundError(f"Product {product_id} not found")

    return product


def list_products(db: Session):
    return db.query(Product).order_by(Product.id).all()


def update_product(db: Session, product_id: int, product_data: ProductUpdate) -> Product:
    product = get_product(db, product_id)
    changes = product_data.model_dump(exclude_unset=True)

    new_name = changes.get("name")
    if new_name is not None and new_name != product.name:
        duplicate = (
            db.query(Product)
            .filter(Product.name == new_name, Product.id != product.id)
            .first()
        )
        if duplicate:
            raise DuplicateRecordError("Product with this name already exists")
        product.name = new_name

    if "category" in changes:
        product.category = changes["category"]

    if changes.get("price") is not None:
        product.price = changes["price"]

    if "supplier_id" in changes:
        if changes["supplier_id"] is not None:
            get_supplier(db, changes["supplier_id"])
        product.supplier_id = changes["supplier_id"]

    try:
        db.commit()

    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Unable to update product {product_id}")
        raise

    db.refresh(product)

    return product
