from pydantic import BaseModel, EmailStr
from datetime import date


class EmployeeCreate(BaseModel):
    first_name: str
    last_name: str
    email: EmailStr | None = None
    hire_date: date | None = None


class EmployeeUpdate(EmployeeCreate):
    pass


class EmployeeResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str | None
    hire_date: date | None

    class Config:
        from_attributes = True
