# app/routers/customers.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_identity
from app.models.customers import Customer
from app.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
)

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
)


def _get_customer(db: Session, customer_id: int) -> Customer:
    customer = db.get(Customer, customer_id)

    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    return customer


@router.get("", response_model=list[CustomerResponse])
def list_customers(db: Session = Depends(get_db)):
    return (
        db.query(Customer)
        .order_by(Customer.last_name, Customer.first_name)
        .all()
    )


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    try:
        customer = Customer(**customer_data.model_dump())

        db.add(customer)
        db.commit()
        db.refresh(customer)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to create customer")

    return customer


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    customer_data: CustomerUpdate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    customer = _get_customer(db, customer_id)

    try:
        # Full replacement, omitted optional fields are cleared
        for field, value in customer_data.model_dump().items():
            setattr(customer, field, value)

        db.commit()
        db.refresh(customer)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to update customer")

    return customer


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    customer = _get_customer(db, customer_id)

    try:
        db.delete(customer)
        db.commit()

    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Customer is referenced by existing sales",
        )

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to delete customer")

    return None
