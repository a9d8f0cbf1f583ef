# app/models/merchandise.py

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.database import Base


class Merchandise(Base):
    __tablename__ = "merchandise"

    id = Column(Integer, primary_key=True, index=True)
    item_name = Column(String(255), nullable=False)
    isbn = Column(String(20), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)

    # No lower bound: sales may drive stock below zero
    item_quantity = Column(Integer, nullable=False, default=0)

    # Weak reference, deleting a supplier does not cascade
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True, index=True)

    supplier = relationship("Supplier")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_merchandise_price_non_negative"),
    )
