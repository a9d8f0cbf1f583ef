# =========================================================
# SALES DETAIL ROUTER (LINE ITEMS)
#
# Every change to a line item moves stock by the matching
# amount and re-sums the owning sale's total.
# =========================================================

from fastapi import APIRouter, Depends, status, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_identity
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.schemas.sale import LineItemResponse
from app.schemas.sales_detail import (
    SalesDetailCreate,
    SalesDetailUpdate,
    SalesDetailRow,
)
from app.services import sales as sales_service
from app.services.transaction import run_atomic

router = APIRouter(prefix="/salesdetail", tags=["Sales Detail"])


@router.get("/{sales_id}", response_model=list[SalesDetailRow])
def list_line_items(sales_id: int, db: Session = Depends(get_db)):
    return sales_service.list_line_items(db, sales_id)


@router.post("", response_model=LineItemResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def add_line_item(
    request: Request,
    detail_data: SalesDetailCreate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    return run_atomic(
        db,
        sales_service.add_line_item,
        detail_data.sales_id,
        detail_data.item_id,
        detail_data.item_quantity,
        detail_data.price_each,
    )


@router.put("/{sales_detail_id}", response_model=LineItemResponse)
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def update_line_item(
    request: Request,
    sales_detail_id: int,
    detail_data: SalesDetailUpdate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    return run_atomic(
        db,
        sales_service.update_line_item,
        sales_detail_id,
        detail_data.item_quantity,
        detail_data.price_each,
    )


@router.delete("/{sales_detail_id}")
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def delete_line_item(
    request: Request,
    sales_detail_id: int,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    run_atomic(db, sales_service.delete_line_item, sales_detail_id)

    return {"message": "Sales detail deleted and inventory reverted successfully."}
