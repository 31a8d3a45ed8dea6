from datetime import datetime

from pydantic import BaseModel, Field

from stockledger.models.product_return import ReturnStatus


class ReturnCreate(BaseModel):
    sale_id: str
    product_id: str
    customer_id: str
    serial_number: str | None = None
    reason: str = Field(min_length=1)
    notes: str | None = None


class ReturnStatusUpdate(BaseModel):
    status: ReturnStatus
    notes: str | None = None


class ReturnOut(BaseModel):
    id: str
    sale_id: str
    product_id: str
    customer_id: str
    serial_number: str | None
    reason: str
    status: ReturnStatus
    return_date: datetime
    resolution_date: datetime | None
    notes: str | None

    model_config = {"from_attributes": True}
