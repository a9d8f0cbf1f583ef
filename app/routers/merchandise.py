# app/routers/merchandise.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.core.auth import get_current_identity
from app.models.merchandise import Merchandise
from app.models.suppliers import Supplier
from app.schemas.merchandise import (
    MerchandiseCreate,
    MerchandiseUpdate,
    MerchandiseResponse,
)

router = APIRouter(
    prefix="/merchandise",
    tags=["Merchandise"],
)


def _to_response(item: Merchandise) -> MerchandiseResponse:
    response = MerchandiseResponse.model_validate(item)
    response.supplier_name = item.supplier.company_name if item.supplier else None
    return response


def _get_item(db: Session, item_id: int) -> Merchandise:
    item = db.get(Merchandise, item_id)

    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Merchandise not found",
        )

    return item


def _check_supplier(db: Session, supplier_id: int | None) -> None:
    if supplier_id and db.get(Supplier, supplier_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Supplier ID {supplier_id} not found",
        )


@router.get("", response_model=list[MerchandiseResponse])
def list_merchandise(db: Session = Depends(get_db)):
    items = (
        db.query(Merchandise)
        .options(joinedload(Merchandise.supplier))
        .order_by(Merchandise.item_name)
        .all()
    )

    return [_to_response(item) for item in items]


@router.get("/{item_id}", response_model=MerchandiseResponse)
def get_merchandise(item_id: int, db: Session = Depends(get_db)):
    return _to_response(_get_item(db, item_id))


@router.post(
    "",
    response_model=MerchandiseResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_merchandise(
    item_data: MerchandiseCreate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    _check_supplier(db, item_data.supplier_id)

    try:
        item = Merchandise(
            item_name=item_data.item_name,
            isbn=item_data.isbn or None,
            price=item_data.price,
            item_quantity=item_data.item_quantity,
            supplier_id=item_data.supplier_id or None,
        )

        db.add(item)
        db.commit()
        db.refresh(item)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to create merchandise")

    return _to_response(item)


@router.put("/{item_id}", response_model=MerchandiseResponse)
def update_merchandise(
    item_id: int,
    item_data: MerchandiseUpdate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    item = _get_item(db, item_id)
    _check_supplier(db, item_data.supplier_id)

    try:
        item.item_name = item_data.item_name
        item.isbn = item_data.isbn or None
        item.price = item_data.price
        item.supplier_id = item_data.supplier_id or None

        # Direct stock correction, bypasses the ledger
        item.item_quantity = item_data.item_quantity

        db.commit()
        db.refresh(item)

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to update merchandise")

    return _to_response(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_merchandise(
    item_id: int,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    item = _get_item(db, item_id)

    try:
        db.delete(item)
        db.commit()

    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Merchandise is referenced by sales or reorders",
        )

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to delete merchandise")

    return None
