# models/sales.py

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True, index=True)

    # Derived from the line items, never edited directly
    total_amount = Column(Numeric(10, 2), nullable=False)

    order_date = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    customer = relationship("Customer")
    employee = relationship("Employee")

    line_items = relationship(
        "SalesDetail",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SalesDetail.id",
    )
