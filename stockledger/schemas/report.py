# schemas/report.py

from pydantic import BaseModel
from datetime import date
from decimal import Decimal



class SalesSummaryResponse(BaseModel):
    total_revenue: Decimal
    total_sales: int
    total_items_sold: int
    start_date: date | None
    end_date: date | None


class ProductSalesResponse(BaseModel):
    product_id: int
    product_name: str
    total_quantity_sold: int
    total_revenue: Decimal
