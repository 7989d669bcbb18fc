from pydantic import BaseModel
from datetime import datetime


class StockLogResponse(BaseModel):
    id: int
    product_id: int
    product_name: str | None
    old_quantity: int
    new_quantity: int
    reason: str
    user_name: str | None
    timestamp: datetime

    class Config:
        from_attributes = True
