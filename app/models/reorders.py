# app/models/reorders.py

import enum

from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class ReorderStatus(str, enum.Enum):
    PENDING = "pending"
    ORDERED = "ordered"
    RECEIVED = "received"
    CANCELLED = "cancelled"


class Reorder(Base):
    __tablename__ = "reorders"

    id = Column(Integer, primary_key=True, index=True)

    item_id = Column(Integer, ForeignKey("merchandise.id"), nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True, index=True)

    quantity = Column(Integer, nullable=False, default=0)

    # NULL or "" is the unset state
    status = Column(String(20), nullable=True, index=True)

    reorder_date = Column(Date, server_default=func.current_date(), nullable=False)

    item = relationship("Merchandise")
    supplier = relationship("Supplier")
