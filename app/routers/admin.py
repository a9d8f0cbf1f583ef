# app/routers/admin.py

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_identity
from app.seed import reset_database

router = APIRouter(prefix="/admin", tags=["Admin"])

logger = logging.getLogger("app")


@router.post("/reset-db")
def reset_db(
    db: Session = Depends(get_db),
    identity=Depends(get_current_identity),
):
    """Drop every table and reload the seed data."""
    reset_database(db)
    logger.info(f"Database reset by {identity.subject}")

    return {"message": "Database has been reset successfully!"}
