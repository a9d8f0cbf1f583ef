# app/services/transaction.py
#
# Atomic units of work over a borrowed Session. Everything executed inside
# a unit is committed together or rolled back together.

import logging
from contextlib import contextmanager
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BookstoreError, StoreError

logger = logging.getLogger("app")

T = TypeVar("T")


@contextmanager
def atomic(db: Session):
    """Commit on clean exit, roll back every effect on any exception.

    Domain errors are re-raised unchanged. Database failures are wrapped in
    StoreError so callers only ever see the domain taxonomy. Nothing is
    retried.
    """
    try:
        yield db
        db.commit()

    except BookstoreError as exc:
        db.rollback()
        logger.warning(f"Atomic unit rolled back: {exc.message}")
        raise

    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Atomic unit rolled back after store failure: {exc}")
        raise StoreError("Database error, no changes were saved") from exc

    except Exception:
        db.rollback()
        logger.exception("Atomic unit rolled back after unexpected error")
        raise


def run_atomic(db: Session, work: Callable[..., T], *args, **kwargs) -> T:
    """Run ``work(db, *args, **kwargs)`` as a single atomic unit."""
    with atomic(db):
        return work(db, *args, **kwargs)
