# schemas/sale.py

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal

class SaleCreate(BaseModel):
    product_id: int
    quantity_sold: int = Field(..., gt=0)
    request_id: str | None = Field(None, max_length=64)

class SaleResponse(BaseModel):
    id: int
    product_id: int
    quantity_sold: int
    total_price: Decimal
    request_id: str | None
    sale_date: datetime

    class Config:
        from_attributes = True
