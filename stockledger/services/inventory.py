# stockledger/services/inventory.py

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from stockledger.core.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ProductNotFoundError,
    StockLedgerError,
)
import stockledger.models.suppliers  # noqa: F401  (Product.supplier target)
from stockledger.models.products import Product
from stockledger.models.stock_transactions import (
    StockTransaction,
    TRANSACTION_ADJUSTMENT,
    TRANSACTION_SALE,
)
from stockledger.models.sales import Sale
from stockledger.schemas.inventory import StockAdjustmentCreate

logger = logging.getLogger("stockledger.inventory")


def lock_product(db: Session, product_id: int) -> Product:
    """Load a product row for update, or raise ProductNotFoundError."""
    product = (
        db.query(Product)
        .filter(Product.id == product_id)
        .with_for_update()
        .first()
    )

    if not product:
        raise ProductNotFoundError(f"Product {product_id} not found")

    return product


def apply_stock_delta(
    db: Session,
    product: Product,
    quantity_change: int,
    transaction_type: str = TRANSACTION_ADJUSTMENT,
    sale: Sale | None = None,
    error_class: type[InsufficientStockError] = InsufficientStockError,
) -> StockTransaction:
    """
    The one place stock moves: change the on-hand quantity and append
    the matching ledger row. Nothing is committed here; the caller owns
    the transaction.

    The change is a single conditional UPDATE computed from the stored
    value, so two sessions selling the same product cannot overwrite
    each other (SQLite ignores FOR UPDATE).
    """
    result = db.execute(
        update(Product)
        .where(
            Product.id == product.id,
            Product.quantity + quantity_change >= 0,
        )
        .values(quantity=Product.quantity + quantity_change)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount != 1:
        available = db.scalar(select(Product.quantity).where(Product.id == product.id))
        raise error_class(
            product_id=product.id,
            requested=-quantity_change,
            available=available,
            message=(
                f"{error_class.message} of {product.name}: "
                f"requested {-quantity_change}, available {available}"
            ),
        )

    db.refresh(product, attribute_names=["quantity"])

    entry = StockTransaction(
        product=product,
        quantity_change=quantity_change,
        transaction_type=transaction_type,
        sale=sale,
    )
    db.add(entry)
    db.flush()

    return entry


# =========================================================
# STOCK ADJUSTMENT ON SALE
# =========================================================
def adjust_stock(db: Session, product_id: int, quantity_sold: int) -> Product:
    if quantity_sold is None or quantity_sold <= 0:
        raise InvalidQuantityError("Quantity sold must be greater than zero")

    try:
        product = lock_product(db, product_id)
        apply_stock_delta(db, product, -quantity_sold, TRANSACTION_SALE)
        db.commit()

    except StockLedgerError as exc:
        db.rollback()
        logger.warning(f"Stock adjustment rejected for product {product_id}: {exc.message}")
        raise

    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Stock adjustment failed for product {product_id}")
        raise

    db.refresh(product)
    logger.info(f"Stock adjusted: product={product.id} change=-{quantity_sold} now={product.quantity}")

    return product


# =========================================================
# MANUAL ADJUSTMENT (RESTOCK / WRITE-OFF)
# =========================================================
def record_adjustment(db: Session, adjustment: StockAdjustmentCreate) -> StockTransaction:
    if adjustment.quantity_change == 0:
        raise InvalidQuantityError("Quantity change cannot be zero")

    try:
        product = lock_product(db, adjustment.product_id)
        entry = apply_stock_delta(db, product, adjustment.quantity_change)
        db.commit()

    except StockLedgerError as exc:
        db.rollback()
        logger.warning(
            f"Adjustment rejected for product {adjustment.product_id}: {exc.message}"
        )
        raise

    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Adjustment failed for product {adjustment.product_id}")
        raise

    db.refresh(entry)
    logger.info(
        f"Stock adjusted: product={entry.product_id} "
        f"change={entry.quantity_change:+d} now={product.quantity}"
    )

    return entry
