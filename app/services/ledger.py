# app/services/ledger.py
#
# Merchandise stock counts. Adjustments are plain SQL increments applied
# inside the caller's atomic unit; nothing here commits.

import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models.merchandise import Merchandise

logger = logging.getLogger("app")


def get_quantity(db: Session, item_id: int) -> int:
    quantity = (
        db.query(Merchandise.item_quantity)
        .filter(Merchandise.id == item_id)
        .scalar()
    )

    if quantity is None:
        raise NotFoundError(f"Merchandise item {item_id} not found")

    return quantity


def adjust(db: Session, item_id: int, delta: int) -> int:
    """Apply ``delta`` to the stock of ``item_id`` and return the new count.

    Negative deltas take stock out (sales), positive ones put it back
    (returns, received reorders). Stock may go below zero unless
    ALLOW_NEGATIVE_STOCK is turned off.
    """
    affected = (
        db.query(Merchandise)
        .filter(Merchandise.id == item_id)
        .update(
            {Merchandise.item_quantity: Merchandise.item_quantity + delta},
            synchronize_session="fetch",
        )
    )

    if affected == 0:
        raise NotFoundError(f"Merchandise item {item_id} not found")

    new_quantity = get_quantity(db, item_id)

    if new_quantity < 0 and not settings.ALLOW_NEGATIVE_STOCK:
        raise ValidationError(
            f"Insufficient stock for item {item_id}. "
            f"Available: {new_quantity - delta}, Requested: {abs(delta)}"
        )

    logger.info(f"Stock adjusted for item {item_id}: {new_quantity - delta} -> {new_quantity}")
    return new_quantity
