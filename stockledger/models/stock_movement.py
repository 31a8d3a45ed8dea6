import uuid
from datetime import datetime
from enum import Enum as PyEnum

from pydantic import BaseModel, Field


class MovementType(str, PyEnum):
    IN = "in"
    OUT = "out"
    SALE = "sale"
    ADJUSTMENT = "adjustment"


class StockMovement(BaseModel):
    """Append-only audit entry for one quantity-affecting event."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    product_id: str
    type: MovementType
    quantity: int  # count for in/out/sale, signed delta for adjustment
    reason: str | None = None
    user_id: str | None = None
    created_at: datetime

    @property
    def delta(self) -> int:
        """Signed effect of this movement on the product quantity."""
        if self.type == MovementType.IN:
            return self.quantity
        if self.type in (MovementType.OUT, MovementType.SALE):
            return -self.quantity
        return self.quantity
