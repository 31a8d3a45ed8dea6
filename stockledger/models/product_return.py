import uuid
from datetime import datetime
from enum import Enum as PyEnum

from pydantic import BaseModel, Field


class ReturnStatus(str, PyEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    RESOLVED = "resolved"


RETURN_TRANSITIONS: dict[ReturnStatus, set[ReturnStatus]] = {
    ReturnStatus.PENDING: {ReturnStatus.APPROVED, ReturnStatus.REJECTED},
    ReturnStatus.APPROVED: {ReturnStatus.RESOLVED},
    ReturnStatus.REJECTED: set(),
    ReturnStatus.RESOLVED: set(),
}

# Statuses that close a return and stamp its resolution_date
CLOSED_STATUSES = {ReturnStatus.REJECTED, ReturnStatus.RESOLVED}


class Return(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sale_id: str
    product_id: str
    customer_id: str
    serial_number: str | None = None
    reason: str
    status: ReturnStatus = ReturnStatus.PENDING
    return_date: datetime
    resolution_date: datetime | None = None
    notes: str | None = None
