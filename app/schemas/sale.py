# schemas/sale.py

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from decimal import Decimal

class LineItemCreate(BaseModel):
    item_id: int
    quantity: int
    price_each: Decimal = Field(..., ge=0)

class SaleCreate(BaseModel):
    customer_id: int | None = None
    employee_id: int | None = None
    line_items: List[LineItemCreate] = []

class SaleHeaderUpdate(BaseModel):
    customer_id: int | None = None
    employee_id: int | None = None

class SaleCreated(BaseModel):
    sales_id: int
    total_amount: Decimal
    message: str = "Sale processed successfully."

class LineItemResponse(BaseModel):
    id: int
    sales_id: int
    item_id: int
    item_quantity: int
    price_each: Decimal

    class Config:
        from_attributes = True

class SaleResponse(BaseModel):
    id: int
    customer_id: int | None
    employee_id: int | None
    total_amount: Decimal
    order_date: datetime
    line_items: List[LineItemResponse]

    class Config:
        from_attributes = True

class SaleSummary(BaseModel):
    sales_id: int
    order_date: datetime
    total_amount: Decimal
    customer_id: int | None
    employee_id: int | None
    customer_name: str | None
    employee_name: str | None
