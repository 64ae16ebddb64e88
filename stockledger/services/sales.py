# =========================================================
# SALES SERVICE
#
# A sale is one transaction:
# - idempotency check on request_id
# - product row locked for update
# - out-of-stock guard BEFORE any write
# - sale row + ledger row + quantity decrement
#
# Any failure rolls the whole thing back.
# =========================================================

import logging
from decimal import Decimal

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from stockledger.core.exceptions import (
    DuplicateRecordError,
    InsufficientStockForSaleError,
    StockLedgerError,
)
from stockledger.models.products import Product
from stockledger.models.sales import Sale
from stockledger.models.stock_transactions import TRANSACTION_SALE
from stockledger.schemas.sale import SaleCreate
from stockledger.services.inventory import apply_stock_delta, lock_product

logger = logging.getLogger("stockledger.sales")


def ensure_stock_for_sale(product: Product, quantity_sold: int):
    if product.quantity < quantity_sold:
        raise InsufficientStockForSaleError(
            product_id=product.id,
            requested=quantity_sold,
            available=product.quantity,
            message=(
                f"Insufficient stock for sale of {product.name}: "
                f"requested {quantity_sold}, available {product.quantity}"
            ),
        )


# =========================================================
# RECORD SALE
# =========================================================
def record_sale(db: Session, sale_data: SaleCreate) -> Sale:

    # ===============================
    # IDEMPOTENCY CHECK (DOUBLE SUBMIT PROTECTION)
    # ===============================
    if sale_data.request_id:
        existing_sale = (
            db.query(Sale)
            .filter(Sale.request_id == sale_data.request_id)
            .first()
        )

        if existing_sale and (
            existing_sale.product_id != sale_data.product_id
            or existing_sale.quantity_sold != sale_data.quantity_sold
        ):
            logger.warning(
                f"Request {sale_data.request_id} reused for a different sale "
                f"(existing sale {existing_sale.id})"
            )
            raise DuplicateRecordError(
                f"Request {sale_data.request_id} already recorded a different sale"
            )

        if existing_sale:
            logger.info(f"Duplicate sale request {sale_data.request_id}, returning sale {existing_sale.id}")
            return existing_sale

    try:
        product = lock_product(db, sale_data.product_id)

        ensure_stock_for_sale(product, sale_data.quantity_sold)

        total_price = Decimal(product.price) * sale_data.quantity_sold

        sale = Sale(
            product=product,
            quantity_sold=sale_data.quantity_sold,
            total_price=total_price,
            request_id=sale_data.request_id,
        )
        db.add(sale)
        db.flush()

        apply_stock_delta(
            db,
            product,
            -sale_data.quantity_sold,
            TRANSACTION_SALE,
            sale=sale,
            error_class=InsufficientStockForSaleError,
        )

        db.commit()

    except StockLedgerError as exc:
        db.rollback()
        logger.warning(f"Sale rejected for product {sale_data.product_id}: {exc.message}")
        raise

    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Unable to complete sale for product {sale_data.product_id}")
        raise

    db.refresh(sale)

    logger.info(
        f"Sale {sale.id}: product={sale.product_id} "
        f"qty={sale.quantity_sold} total={sale.total_price}"
    )

    return sale


def list_sales(db: Session, product_id: int | None = None, limit: int = 20, offset: int = 0):
    query = db.query(Sale)

    if product_id is not None:
        query = query.filter(Sale.product_id == product_id)

    return (
        query
        .order_by(Sale.sale_date.desc(), Sale.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
