# =========================================================
# REPORTS
#
# Read-only queries over products, sales and the ledger:
# - inventory ordered by quantity
# - total revenue (optionally within a date window)
# - top selling products
# - low stock listing (quantity below threshold)
# - stock history per product
#
# Money totals are always Decimal, never None
# =========================================================

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from stockledger.core.config import settings
from stockledger.models.products import Product
from stockledger.models.sales import Sale
from stockledger.models.stock_transactions import StockTransaction
from stockledger.schemas.inventory import InventoryLevelResponse
from stockledger.schemas.report import ProductSalesResponse, SalesSummaryResponse
from stockledger.services.catalogue import get_product


CENT = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENT)


def _date_filters(start_date: date | None, end_date: date | None):
    filters = []

    if start_date is not None:
        filters.append(Sale.sale_date >= datetime.combine(start_date, datetime.min.time()))

    if end_date is not None:
        filters.append(Sale.sale_date <= datetime.combine(end_date, datetime.max.time()))

    return filters


# =========================================================
# INVENTORY BY QUANTITY
# =========================================================
def inventory_by_quantity(db: Session) -> list[InventoryLevelResponse]:
    rows = (
        db.query(
            Product.id.label("product_id"),
            Product.name.label("product_name"),
            Product.quantity,
        )
        .order_by(Product.quantity.desc(), Product.name)
        .all()
    )

    return [
        InventoryLevelResponse(
            product_id=row.product_id,
            product_name=row.product_name,
            quantity=row.quantity,
        )
        for row in rows
    ]


# =========================================================
# TOTAL REVENUE
# =========================================================
def total_revenue(
    db: Session,
    start_date: date | None = None,
    end_date: date | None = None,
) -> Decimal:
    revenue = (
        db.query(func.coalesce(func.sum(Sale.total_price), 0))
        .filter(*_date_filters(start_date, end_date))
        .scalar()
    )

    return _money(revenue)


def sales_summary(
    db: Session,
    start_date: date | None = None,
    end_date: date | None = None,
) -> SalesSummaryResponse:
    base_filter = _date_filters(start_date, end_date)

    total_sales = (
        db.query(func.count(Sale.id))
        .filter(*base_filter)
        .scalar()
    )

    total_items_sold = (
        db.query(func.coalesce(func.sum(Sale.quantity_sold), 0))
        .filter(*base_filter)
        .scalar()
    )

    return SalesSummaryResponse(
        total_revenue=total_revenue(db, start_date, end_date),
        total_sales=total_sales or 0,
        total_items_sold=total_items_sold or 0,
        start_date=start_date,
        end_date=end_date,
    )


# =========================================================
# TOP SELLING PRODUCTS
# =========================================================
def top_selling_products(db: Session, limit: int | None = None) -> list[ProductSalesResponse]:
    limit = limit or settings.TOP_SELLING_LIMIT
    quantity_sold = func.sum(Sale.quantity_sold)

    rows = (
        db.query(
            Product.id.label("product_id"),
            Product.name.label("product_name"),
            quantity_sold.label("total_quantity_sold"),
            func.coalesce(func.sum(Sale.total_price), 0).label("total_revenue"),
        )
        .join(Sale, Sale.product_id == Product.id)
        .group_by(Product.id, Product.name)
        .order_by(quantity_sold.desc(), Product.name)
        .limit(limit)
        .all()
    )

    return [
        ProductSalesResponse(
            product_id=row.product_id,
            product_name=row.product_name,
            total_quantity_sold=row.total_quantity_sold,
            total_revenue=_money(row.total_revenue),
        )
        for row in rows
    ]


# =========================================================
# LOW STOCK
# =========================================================
def low_stock_products(db: Session, threshold: int | None = None) -> list[Product]:
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD

    return (
        db.query(Product)
        .filter(Product.quantity < threshold)
        .order_by(Product.quantity, Product.name)
        .all()
    )


def stock_history(db: Session, product_id: int) -> list[StockTransaction]:
    get_product(db, product_id)

    return (
        db.query(StockTransaction)
        .filter(StockTransaction.product_id == product_id)
        .order_by(StockTransaction.id)
        .all()
    )
