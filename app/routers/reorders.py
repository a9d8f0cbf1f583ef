# =========================================================
# REORDERS ROUTER
#
# pending/ordered on creation, then receive (ordered only,
# adds stock) or cancel (pending, ordered or unset).
# Only pending reorders can be deleted.
# =========================================================

from fastapi import APIRouter, Depends, status, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_identity
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.schemas.reorder import ReorderCreate, ReorderResponse, ReorderRow
from app.services import reorders as reorder_service
from app.services.transaction import run_atomic

router = APIRouter(prefix="/reorders", tags=["Reorders"])


@router.get("", response_model=list[ReorderRow])
def list_reorders(db: Session = Depends(get_db)):
    return reorder_service.list_reorders(db)


@router.post("", response_model=ReorderResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def create_reorder(
    request: Request,
    reorder_data: ReorderCreate,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    return run_atomic(
        db,
        reorder_service.create_reorder,
        reorder_data.item_id,
        quantity=reorder_data.quantity,
        supplier_id=reorder_data.supplier_id,
        status=reorder_data.status,
    )


@router.put("/receive/{reorder_id}", response_model=ReorderResponse)
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def receive_reorder(
    request: Request,
    reorder_id: int,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    return run_atomic(db, reorder_service.receive_reorder, reorder_id)


@router.put("/cancel/{reorder_id}", response_model=ReorderResponse)
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def cancel_reorder(
    request: Request,
    reorder_id: int,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    return run_atomic(db, reorder_service.cancel_reorder, reorder_id)


@router.delete("/{reorder_id}")
@limiter.limit(settings.RATE_LIMIT_MUTATIONS)
def delete_reorder(
    request: Request,
    reorder_id: int,
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    run_atomic(db, reorder_service.delete_reorder, reorder_id)

    return {"message": "Pending reorder deleted successfully."}
