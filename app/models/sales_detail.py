# models/sales_detail.py

from sqlalchemy import Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from app.database import Base


class SalesDetail(Base):
    __tablename__ = "sales_detail"

    id = Column(Integer, primary_key=True, index=True)

    sales_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("merchandise.id"), nullable=False, index=True)

    item_quantity = Column(Integer, nullable=False)

    # Captured at insertion, not re-read from the catalog
    price_each = Column(Numeric(10, 2), nullable=False)

    sale = relationship("Sale", back_populates="line_items")
    item = relationship("Merchandise")
