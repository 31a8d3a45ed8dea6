import uuid
from datetime import datetime
from enum import Enum as PyEnum

from pydantic import BaseModel, Field


class SerialStatus(str, PyEnum):
    AVAILABLE = "available"
    SOLD = "sold"
    RETURNED = "returned"
    DEFECTIVE = "defective"


# Allowed status changes; defective is terminal
SERIAL_TRANSITIONS: dict[SerialStatus, set[SerialStatus]] = {
    SerialStatus.AVAILABLE: {SerialStatus.SOLD, SerialStatus.DEFECTIVE},
    SerialStatus.SOLD: {SerialStatus.RETURNED, SerialStatus.DEFECTIVE},
    SerialStatus.RETURNED: {SerialStatus.AVAILABLE, SerialStatus.DEFECTIVE},
    SerialStatus.DEFECTIVE: set(),
}


class SerialNumber(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    product_id: str
    serial_number: str
    status: SerialStatus = SerialStatus.AVAILABLE
    sale_id: str | None = None
    created_at: datetime

    def can_transition(self, status: SerialStatus) -> bool:
        return status == self.status or status in SERIAL_TRANSITIONS[self.status]
