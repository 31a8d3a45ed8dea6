from datetime import datetime

from pydantic import BaseModel

from stockledger.models.stock_movement import MovementType


class StockMovementCreate(BaseModel):
    product_id: str
    type: MovementType
    quantity: int  # positive for in/out, signed for adjustment
    reason: str | None = None
    user_id: str | None = None


class StockMovementOut(BaseModel):
    id: str
    product_id: str
    type: MovementType
    quantity: int
    reason: str | None
    user_id: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
