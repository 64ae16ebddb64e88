from decimal import Decimal
from pydantic import BaseModel, Field
from datetime import datetime


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str | None = Field(None, max_length=50)

    price: Decimal = Field(
        ...,
        gt=0,
        lt=100_000_000,
        decimal_places=2,
        description="Unit price must be positive and below 100 million"
    )

    quantity: int = Field(
        0,
        ge=0,
        description="Opening stock, recorded in the ledger when non-zero"
    )

    supplier_id: int | None = None
    

class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    category: str | None = None
    price: Decimal | None = Field(None, gt=0, lt=100_000_000, decimal_places=2)
    supplier_id: int | None = None

class ProductResponse(BaseModel):
    id: int
    name: str
    category: str | None
    price: Decimal
    quantity: int
    supplier_id: int | None
    created_at: datetime

    class Config:
        from_attributes = True
