import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class Product(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    stock_code: str
    product_name: str
    quantity: int = 0
    entry_price: Decimal
    sale_price: Decimal
    serial_number: str | None = None  # legacy single-serial field, see SerialNumber
    product_link: str | None = None
    description: str | None = None
    low_stock_threshold: int | None = None
    qr_code: str = ""
    created_at: datetime
    updated_at: datetime

    def effective_threshold(self, default: int) -> int:
        # 0 and None both fall back to the default threshold
        return self.low_stock_threshold or default
