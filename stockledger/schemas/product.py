from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    stock_code: str = Field(min_length=1)
    product_name: str = Field(min_length=1)
    quantity: int = Field(0, ge=0)
    entry_price: Decimal = Field(ge=0, decimal_places=2)
    sale_price: Decimal = Field(ge=0, decimal_places=2)
    serial_number: str | None = None
    product_link: str | None = None
    description: str | None = None
    low_stock_threshold: int | None = Field(None, ge=0)


class ProductUpdate(BaseModel):
    stock_code: str | None = Field(None, min_length=1)
    product_name: str | None = None
    # Written through an adjustment movement, never directly
    quantity: int | None = Field(None, ge=0)
    entry_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    sale_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    serial_number: str | None = None
    product_link: str | None = None
    description: str | None = None
    low_stock_threshold: int | None = Field(None, ge=0)


class ProductOut(BaseModel):
    id: str
    stock_code: str
    product_name: str
    quantity: int
    entry_price: Decimal
    sale_price: Decimal
    serial_number: str | None
    product_link: str | None
    description: str | None
    low_stock_threshold: int | None
    qr_code: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReconcileOut(BaseModel):
    product_id: str
    quantity: int
    ledger_quantity: int
    consistent: bool
