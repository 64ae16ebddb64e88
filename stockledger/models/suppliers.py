# stockledger/models/suppliers.py

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from stockledger.database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    contact_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Parents with children cannot be deleted (ON DELETE RESTRICT)
    products = relationship("Product", back_populates="supplier", passive_deletes="all")
