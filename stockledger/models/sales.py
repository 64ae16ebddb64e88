# models/sales.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, DateTime, ForeignKey, Numeric, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from stockledger.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    quantity_sold = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    # Optional idempotency key (double submit protection)
    request_id = Column(String(64), nullable=True, unique=True)

    sale_date = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    product = relationship("Product", back_populates="sales")
    transaction = relationship("StockTransaction", back_populates="sale", uselist=False, passive_deletes="all")

    __table_args__ = (
        Index("ix_sales_product_date", "product_id", "sale_date"),
        CheckConstraint("quantity_sold > 0", name="ck_sales_quantity_positive"),
        CheckConstraint("total_price >= 0", name="ck_sales_total_price_non_negative"),
    )
