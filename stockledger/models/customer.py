import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class Customer(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    customer_name: str
    company_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime
