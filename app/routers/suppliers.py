# app/routers/suppliers.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_identity
from app.models.suppliers import Supplier
from app.schemas.supplier import (
    SupplierCreate,
    SupplierUpdate,
    SupplierResponse,
)

router = APIRouter(
    prefix="/suppliers",
    tags=["Suppliers"],
)


@router.get("", response_model=list[SupplierResponse])
def list_suppliers(db: Session = Depends(get_db)):
    return db.query(Supplier).order_by(Supplier.company_name).all()


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_supplier(
    supplier_data: SupplierCreate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    try:
        supplier = Supplier(**supplier_data.model_dump())

        db.add(supplier)
        db.commit()
        db.refresh(supplier)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to create supplier")

    return supplier


@router.put("/{supplier_id}", response_model=SupplierResponse)
def update_supplier(
    supplier_id: int,
    supplier_data: SupplierUpdate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    supplier = db.query(Supplier).filter(Supplier.id == supplier_id).first()

    if not supplier:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Supplier ID {supplier_id} not found",
        )

    try:
        supplier.company_name = supplier_data.company_name
        supplier.contact_name = supplier_data.contact_name
        supplier.email = supplier_data.email
        supplier.phone = supplier_data.phone

        db.commit()
        db.refresh(supplier)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to update supplier")

    return supplier


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    supplier = db.query(Supplier).filter(Supplier.id == supplier_id).first()

    if not supplier:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Supplier ID {supplier_id} not found",
        )

    try:
        # Merchandise and reorders keep their rows, supplier_id is set to NULL
        db.delete(supplier)
        db.commit()

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to delete supplier")

    return None
