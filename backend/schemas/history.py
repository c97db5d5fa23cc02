# backend/schemas/history.py
from typing import Optional
from pydantic import BaseModel, ConfigDict


class HistoryEntryOut(BaseModel):
    id: int
    product_id: Optional[int] = None
    old_quantity: Optional[int] = None
    new_quantity: Optional[int] = None
    change_date: Optional[str] = None
    user_info: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
