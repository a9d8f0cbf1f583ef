# =========================================================
# REORDER WORKFLOW
#
#   pending ──► cancelled
#   ordered ──► received   (stock += quantity)
#   ordered ──► cancelled
#   unset   ──► cancelled  (NULL or "" status)
#
# Only pending reorders may be deleted. Transitions are
# conditional updates, so a disallowed one touches no rows.
# =========================================================

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidStateError, NotFoundError
from app.models.merchandise import Merchandise
from app.models.reorders import Reorder, ReorderStatus
from app.models.suppliers import Supplier
from app.services import ledger

logger = logging.getLogger("app")

CREATABLE_STATUSES = {ReorderStatus.PENDING.value, ReorderStatus.ORDERED.value}


def coerce_initial_status(status: str | None) -> str:
    """Reorders start as pending unless 'ordered' is explicitly requested."""
    if status and status.strip().lower() in CREATABLE_STATUSES:
        return status.strip().lower()
    return ReorderStatus.PENDING.value


def is_unset(status: str | None) -> bool:
    return status is None or status == ""


def _get_reorder(db: Session, reorder_id: int) -> Reorder:
    reorder = db.get(Reorder, reorder_id)
    if reorder is None:
        raise NotFoundError(f"Reorder {reorder_id} not found")
    return reorder


def _status_condition(allowed: set[ReorderStatus], include_unset: bool):
    condition = Reorder.status.in_([s.value for s in allowed])
    if include_unset:
        condition = or_(condition, Reorder.status.is_(None), Reorder.status == "")
    return condition


def _check_status(
    reorder: Reorder,
    allowed: set[ReorderStatus],
    action: str,
    include_unset: bool = False,
) -> None:
    if reorder.status in {s.value for s in allowed}:
        return
    if include_unset and is_unset(reorder.status):
        return
    raise InvalidStateError(
        f"Cannot {action} reorder {reorder.id} while its status is "
        f"'{reorder.status or 'unset'}'"
    )


def _transition(
    db: Session,
    reorder: Reorder,
    allowed: set[ReorderStatus],
    target: ReorderStatus,
    action: str,
    include_unset: bool = False,
) -> Reorder:
    affected = (
        db.query(Reorder)
        .filter(Reorder.id == reorder.id, _status_condition(allowed, include_unset))
        .update({Reorder.status: target.value}, synchronize_session="fetch")
    )

    # Status changed underneath us since it was read
    if affected == 0:
        raise InvalidStateError(f"Cannot {action} reorder {reorder.id}: status changed")

    return reorder


# ---------------- CREATE ----------------

def create_reorder(
    db: Session,
    item_id: int,
    quantity: int | None = 0,
    supplier_id: int | None = None,
    status: str | None = None,
) -> Reorder:
    if db.get(Merchandise, item_id) is None:
        raise NotFoundError(f"Merchandise item {item_id} not found")
    if supplier_id and db.get(Supplier, supplier_id) is None:
        raise NotFoundError(f"Supplier {supplier_id} not found")

    reorder = Reorder(
        item_id=item_id,
        supplier_id=supplier_id or None,
        quantity=quantity or 0,
        status=coerce_initial_status(status),
    )
    db.add(reorder)
    db.flush()
    db.refresh(reorder)

    logger.info(f"Reorder {reorder.id} created for item {item_id} ({reorder.status})")
    return reorder


# ---------------- TRANSITIONS ----------------

def receive_reorder(db: Session, reorder_id: int) -> Reorder:
    """Book an ordered reorder into stock and mark it received."""
    reorder = _get_reorder(db, reorder_id)
    _check_status(reorder, {ReorderStatus.ORDERED}, "receive")

    ledger.adjust(db, reorder.item_id, reorder.quantity)
    _transition(db, reorder, {ReorderStatus.ORDERED}, ReorderStatus.RECEIVED, "receive")

    logger.info(f"Reorder {reorder_id} received, {reorder.quantity} units of item {reorder.item_id} added")
    return reorder


def cancel_reorder(db: Session, reorder_id: int) -> Reorder:
    open_statuses = {ReorderStatus.PENDING, ReorderStatus.ORDERED}

    reorder = _get_reorder(db, reorder_id)
    _check_status(reorder, open_statuses, "cancel", include_unset=True)
    _transition(db, reorder, open_statuses, ReorderStatus.CANCELLED, "cancel", include_unset=True)

    logger.info(f"Reorder {reorder_id} cancelled")
    return reorder


def delete_reorder(db: Session, reorder_id: int) -> None:
    reorder = _get_reorder(db, reorder_id)
    _check_status(reorder, {ReorderStatus.PENDING}, "delete")

    affected = (
        db.query(Reorder)
        .filter(Reorder.id == reorder_id, Reorder.status == ReorderStatus.PENDING.value)
        .delete(synchronize_session="fetch")
    )
    if affected == 0:
        raise InvalidStateError(f"Cannot delete reorder {reorder_id}: status changed")

    logger.info(f"Pending reorder {reorder_id} deleted")


# ---------------- READS ----------------

def list_reorders(db: Session) -> list[dict]:
    rows = (
        db.query(Reorder, Merchandise, Supplier)
        .join(Merchandise, Reorder.item_id == Merchandise.id)
        .outerjoin(Supplier, Reorder.supplier_id == Supplier.id)
        .order_by(Reorder.reorder_date.desc(), Reorder.id.desc())
        .all()
    )

    return [
        {
            "reorder_id": reorder.id,
            "reorder_date": reorder.reorder_date,
            "quantity": reorder.quantity,
            "status": (reorder.status or "").strip().lower(),
            "item_id": item.id,
            "item_name": item.item_name,
            "supplier_id": reorder.supplier_id,
            "supplier": supplier.company_name if supplier else None,
        }
        for reorder, item, supplier in rows
    ]
