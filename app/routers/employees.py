# app/routers/employees.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_identity
from app.models.employees import Employee
from app.schemas.employee import (
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeResponse,
)

router = APIRouter(
    prefix="/employees",
    tags=["Employees"],
)


def _get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)

    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )

    return employee


@router.get("", response_model=list[EmployeeResponse])
def list_employees(db: Session = Depends(get_db)):
    return (
        db.query(Employee)
        .order_by(Employee.last_name, Employee.first_name)
        .all()
    )


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_employee(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    try:
        employee = Employee(**employee_data.model_dump())

        db.add(employee)
        db.commit()
        db.refresh(employee)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to create employee")

    return employee


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    employee_data: EmployeeUpdate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    employee = _get_employee(db, employee_id)

    try:
        for field, value in employee_data.model_dump().items():
            setattr(employee, field, value)

        db.commit()
        db.refresh(employee)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to update employee")

    return employee


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    employee = _get_employee(db, employee_id)

    try:
        db.delete(employee)
        db.commit()

    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Employee is referenced by existing sales",
        )

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to delete employee")

    return None
