# stockledger/models/stock_transactions.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from stockledger.database import Base


TRANSACTION_SALE = "sale"
TRANSACTION_ADJUSTMENT = "adjustment"


class StockTransaction(Base):
    """Append-only ledger row: one per stock-affecting event."""

    __tablename__ = "stock_transactions"

    id = Column(Integer, primary_key=True, index=True)

    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Signed delta: negative for sales and write-offs
    quantity_change = Column(Integer, nullable=False)
    transaction_type = Column(String(20), nullable=False)

    sale_id = Column(
        Integer,
        ForeignKey("sales.id", ondelete="RESTRICT"),
        nullable=True,
        unique=True,
    )

    transaction_date = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    product = relationship("Product", back_populates="transactions")
    sale = relationship("Sale", back_populates="transaction")

    __table_args__ = (
        Index("ix_stock_transactions_product_date", "product_id", "transaction_date"),
        CheckConstraint("quantity_change <> 0", name="ck_stock_transactions_change_non_zero"),
        CheckConstraint(
            "transaction_type IN ('sale', 'adjustment')",
            name="ck_stock_transactions_type_valid",
        ),
    )
