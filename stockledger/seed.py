"""
Sample data loader.

Everything goes through the service layer, so opening stock and the
sample sales land in the ledger exactly as live data would.

    python -m stockledger.seed
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from stockledger.core.logger import configure_logging
from stockledger.database import init_db, session_scope
from stockledger.models.products import Product
from stockledger.schemas.product import ProductCreate
from stockledger.schemas.sale import SaleCreate
from stockledger.schemas.supplier import SupplierCreate
from stockledger.services.catalogue import create_product, create_supplier
from stockledger.services.sales import record_sale

logger = logging.getLogger("stockledger.seed")


SUPPLIERS = [
    {
        "name": "Tech Distributors Ltd",
        "contact_name": "Alice Morgan",
        "email": "alice@techdistributors.com",
        "address": "12 Market Street, Springfield",
    },
    {
        "name": "Office Essentials Inc",
        "contact_name": "Brian Otieno",
        "email": "brian@officeessentials.com",
        "address": "48 Harbour Road, Riverside",
    },
    {
        "name": "Gadget World",
        "contact_name": "Chen Wei",
        "email": "sales@gadgetworld.com",
        "address": "7 Industrial Park, Lakeview",
    },
]

# (name, category, price, opening quantity, supplier name)
PRODUCTS = [
    ("Laptop", "Electronics", Decimal("999.99"), 10, "Tech Distributors Ltd"),
    ("Smartphone", "Electronics", Decimal("599.99"), 25, "Gadget World"),
    ("Wireless Mouse", "Accessories", Decimal("19.99"), 50, "Tech Distributors Ltd"),
    ("Mechanical Keyboard", "Accessories", Decimal("79.99"), 15, "Tech Distributors Ltd"),
    ("Office Chair", "Furniture", Decimal("149.99"), 4, "Office Essentials Inc"),
    ("Desk Lamp", "Furniture", Decimal("24.99"), 3, "Office Essentials Inc"),
    ("USB-C Cable", "Accessories", Decimal("9.99"), 100, "Gadget World"),
]

# (product name, quantity sold)
SALES = [
    ("Laptop", 2),
    ("Smartphone", 5),
    ("Wireless Mouse", 10),
    ("USB-C Cable", 20),
    ("Mechanical Keyboard", 3),
    ("Office Chair", 1),
]


def seed(db: Session) -> bool:
    """Load the sample data. Returns False when products already exist."""
    if db.query(Product).first():
        logger.info("Database already has products, skipping seed")
        return False

    suppliers = {
        data["name"]: create_supplier(db, SupplierCreate(**data))
        for data in SUPPLIERS
    }

    products = {}
    for name, category, price, quantity, supplier_name in PRODUCTS:
        products[name] = create_product(
            db,
            ProductCreate(
                name=name,
                category=category,
                price=price,
                quantity=quantity,
                supplier_id=suppliers[supplier_name].id,
            ),
        )

    for name, quantity_sold in SALES:
        record_sale(
            db,
            SaleCreate(product_id=products[name].id, quantity_sold=quantity_sold),
        )

    logger.info(
        f"Seeded {len(suppliers)} suppliers, {len(products)} products, {len(SALES)} sales"
    )
    return True


def main():
    configure_logging()
    init_db()

    with session_scope() as db:
        seed(db)


if __name__ == "__main__":
    main()
