from datetime import datetime

from pydantic import BaseModel, Field

from stockledger.models.serial_number import SerialStatus


class SerialNumberCreate(BaseModel):
    product_id: str
    serial_number: str = Field(min_length=1)
    status: SerialStatus = SerialStatus.AVAILABLE
    sale_id: str | None = None


class SerialNumberUpdate(BaseModel):
    serial_number: str | None = Field(None, min_length=1)
    status: SerialStatus | None = None
    sale_id: str | None = None


class SerialNumberOut(BaseModel):
    id: str
    product_id: str
    serial_number: str
    status: SerialStatus
    sale_id: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
