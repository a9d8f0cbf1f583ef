# schemas/sales_detail.py

from pydantic import BaseModel, Field
from decimal import Decimal


class SalesDetailCreate(BaseModel):
    sales_id: int
    item_id: int
    item_quantity: int
    price_each: Decimal = Field(..., ge=0)


class SalesDetailUpdate(BaseModel):
    item_quantity: int
    price_each: Decimal = Field(..., ge=0)


class SalesDetailRow(BaseModel):
    sales_detail_id: int
    sales_id: int
    item_id: int
    item_name: str
    isbn: str | None
    item_quantity: int
    price_each: Decimal
    line_total: Decimal
