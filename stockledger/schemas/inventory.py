from pydantic import BaseModel, Field, field_validator
from datetime import datetime


class StockAdjustmentCreate(BaseModel):
    product_id: int
    quantity_change: int = Field(..., description="Signed delta: positive to restock, negative to write off")

    @field_validator("quantity_change")
    @classmethod
    def reject_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("Quantity change cannot be zero")
        return value

class StockTransactionResponse(BaseModel):
    id: int
    product_id: int
    quantity_change: int
    transaction_type: str
    sale_id: int | None
    transaction_date: datetime

    class Config:
        from_attributes = True

class InventoryLevelResponse(BaseModel):
    product_id: int
    product_name: str
    quantity: int
