from decimal import Decimal
from pydantic import BaseModel, Field


class MerchandiseCreate(BaseModel):
    item_name: str
    isbn: str | None = None

    price: Decimal = Field(
        ...,
        ge=0,
        lt=100_000_000,
        description="Unit price must be below 100 million"
    )

    # Not bounded below, stock counts may be negative
    item_quantity: int = 0
    supplier_id: int | None = None


class MerchandiseUpdate(MerchandiseCreate):
    pass


class MerchandiseResponse(BaseModel):
    id: int
    item_name: str
    isbn: str | None
    price: Decimal
    item_quantity: int
    supplier_id: int | None
    supplier_name: str | None = None

    class Config:
        from_attributes = True
