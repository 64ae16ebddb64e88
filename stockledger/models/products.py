# stockledger/models/products.py

from sqlalchemy import CheckConstraint, Column, Integer, String, Numeric, ForeignKey, DateTime, event, inspect
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from stockledger.core.exceptions import InsufficientStockError
from stockledger.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    category = Column(String(50), nullable=True, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)

    supplier_id = Column(
        Integer,
        ForeignKey("suppliers.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    supplier = relationship("Supplier", back_populates="products")
    transactions = relationship(
        "StockTransaction",
        back_populates="product",
        order_by="StockTransaction.id",
        passive_deletes="all",
    )
    sales = relationship("Sale", back_populates="product", passive_deletes="all")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
        CheckConstraint("price > 0", name="ck_products_price_positive"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Product {self.id} {self.name!r} qty={self.quantity}>"


# NON-NEGATIVE STOCK GUARD

@event.listens_for(Product, "before_update")
def _reject_negative_quantity(mapper, connection, target: Product) -> None:
    if target.quantity is not None and target.quantity < 0:
        committed = inspect(target).attrs.quantity.history.deleted
        raise InsufficientStockError(
            product_id=target.id,
            available=committed[0] if committed else None,
            message=f"Insufficient stock for update of {target.name}",
        )
