# =========================================================
# SALES ROUTER
#
# Sale headers. Creating a sale inserts its line items and
# takes the sold units out of stock in one atomic unit.
# =========================================================

from fastapi import APIRouter, Depends, Query, status, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_identity
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.schemas.sale import (
    SaleCreate,
    SaleCreated,
    SaleHeaderUpdate,
    SaleResponse,
    SaleSummary,
)
from app.services import sales as sales_service
from app.services.transaction import run_atomic

router = APIRouter(prefix="/sales", tags=["Sales"])


# =========================================================
# LIST SALES
# =========================================================
@router.get("", response_model=list[SaleSummary])
def list_sales(db: Session = Depends(get_db)):
    return sales_service.list_sales(db)


# =========================================================
# GET SINGLE SALE (WITH LINE ITEMS)
# =========================================================
@router.get("/{sales_id}", response_model=SaleResponse)
def get_sale(sales_id: int, db: Session = Depends(get_db)):
    return sales_service.get_sale(db, sales_id)


# =========================================================
# CREATE SALE
# =========================================================
@router.post("", response_model=SaleCreated, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def create_sale(
    request: Request,
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    sale = run_atomic(
        db,
        sales_service.create_sale,
        sale_data.customer_id,
        sale_data.employee_id,
        sale_data.line_items,
    )

    return SaleCreated(sales_id=sale.id, total_amount=sale.total_amount)


# =========================================================
# UPDATE SALE HEADER (CUSTOMER / EMPLOYEE ONLY)
# =========================================================
@router.put("/{sales_id}")
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def update_sale(
    request: Request,
    sales_id: int,
    sale_data: SaleHeaderUpdate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    run_atomic(
        db,
        sales_service.update_sale_header,
        sales_id,
        sale_data.customer_id,
        sale_data.employee_id,
    )

    return {"message": "Sale updated successfully."}


# =========================================================
# DELETE SALE
# =========================================================
@router.delete("/{sales_id}")
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def delete_sale(
    request: Request,
    sales_id: int,
    restock: bool = Query(False),
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    run_atomic(db, sales_service.delete_sale, sales_id, restock=restock)

    return {"message": "Sale cancelled successfully."}
