from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class SaleCreate(BaseModel):
    product_id: str
    customer_id: str | None = None
    quantity_sold: int = Field(gt=0)
    sale_price: Decimal = Field(ge=0, decimal_places=2)
    # Accepted for compatibility; the store always recomputes it
    total_amount: Decimal | None = None
    notes: str | None = None
    serial_numbers: list[str] = []


class SaleOut(BaseModel):
    id: str
    product_id: str
    customer_id: str | None
    quantity_sold: int
    sale_price: Decimal
    total_amount: Decimal
    sale_date: datetime
    notes: str | None
    serial_numbers: list[str] = []

    model_config = {"from_attributes": True}


class StatsOut(BaseModel):
    total_products: int
    low_stock: int
    today_sales: Decimal  # summed total_amount of today's sales, not a count
    active_customers: int
