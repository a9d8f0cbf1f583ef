# schemas/reorder.py

from pydantic import BaseModel
from datetime import date


class ReorderCreate(BaseModel):
    item_id: int
    supplier_id: int | None = None
    quantity: int | None = 0
    status: str | None = None


class ReorderResponse(BaseModel):
    id: int
    item_id: int
    supplier_id: int | None
    quantity: int
    status: str | None
    reorder_date: date

    class Config:
        from_attributes = True


class ReorderRow(BaseModel):
    reorder_id: int
    reorder_date: date
    quantity: int
    status: str
    item_id: int
    item_name: str
    supplier_id: int | None
    supplier: str | None
