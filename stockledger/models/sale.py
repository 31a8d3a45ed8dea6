import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class Sale(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    product_id: str
    customer_id: str | None = None
    quantity_sold: int
    sale_price: Decimal
    total_amount: Decimal
    sale_date: datetime
    notes: str | None = None

    # Unit serials consumed by this sale
    serial_numbers: list[str] = []
