from pydantic import BaseModel, EmailStr, Field
from datetime import datetime


class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    contact_name: str | None = Field(None, max_length=100)
    email: EmailStr | None = Field(None, description="Supplier contact e-mail")
    address: str | None = Field(None, max_length=255)

class SupplierResponse(BaseModel):
    id: int
    name: str
    contact_name: str | None
    email: str | None
    address: str | None
    created_at: datetime

    class Config:
        from_attributes = True
