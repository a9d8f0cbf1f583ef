from pydantic import BaseModel, EmailStr


class SupplierCreate(BaseModel):
    company_name: str
    contact_name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None


class SupplierUpdate(SupplierCreate):
    pass


class SupplierResponse(BaseModel):
    id: int
    company_name: str
    contact_name: str | None
    email: str | None
    phone: str | None

    class Config:
        from_attributes = True
