from pydantic import BaseModel, EmailStr


class CustomerCreate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    zip_code: str | None = None


class CustomerUpdate(CustomerCreate):
    pass


class CustomerResponse(BaseModel):
    id: int
    first_name: str | None
    last_name: str | None
    email: str | None
    address_line1: str | None
    address_line2: str | None
    zip_code: str | None

    class Config:
        from_attributes = True
