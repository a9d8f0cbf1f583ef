# =========================================================
# SALE AGGREGATE
#
# A sale header plus its line items. Every mutation here runs
# inside the caller's atomic unit (see services/transaction.py)
# and keeps merchandise stock in step through the ledger.
#
# Always: sale.total_amount == sum(quantity * price_each)
# over the sale's current line items after every mutation.
# =========================================================

import logging
from decimal import Decimal
from typing import Sequence

from sqlalchemy.orm import Session, aliased

from app.core.exceptions import NotFoundError, ValidationError
from app.models.customers import Customer
from app.models.employees import Employee
from app.models.merchandise import Merchandise
from app.models.sales import Sale
from app.models.sales_detail import SalesDetail
from app.services import ledger

logger = logging.getLogger("app")

TWO_PLACES = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(TWO_PLACES)


def line_total(quantity: int, price_each) -> Decimal:
    return (Decimal(quantity) * _money(price_each)).quantize(TWO_PLACES)


def _get_sale(db: Session, sales_id: int) -> Sale:
    sale = db.get(Sale, sales_id)
    if sale is None:
        raise NotFoundError(f"Sale {sales_id} not found")
    return sale


def _get_line_item(db: Session, sales_detail_id: int) -> SalesDetail:
    detail = db.get(SalesDetail, sales_detail_id)
    if detail is None:
        raise NotFoundError(f"Sales detail {sales_detail_id} not found")
    return detail


def _require(db: Session, model, row_id: int | None, label: str) -> None:
    # Optional references are only checked when given
    if row_id is not None and db.get(model, row_id) is None:
        raise NotFoundError(f"{label} {row_id} not found")


def recompute_total(db: Session, sales_id: int) -> Decimal:
    """Re-sum every current line item of the sale and store the result."""
    db.flush()

    details = (
        db.query(SalesDetail)
        .filter(SalesDetail.sales_id == sales_id)
        .all()
    )
    total = sum(
        (line_total(d.item_quantity, d.price_each) for d in details),
        Decimal("0.00"),
    )

    db.query(Sale).filter(Sale.id == sales_id).update(
        {Sale.total_amount: total},
        synchronize_session="fetch",
    )
    return total


# ---------------- SALE HEADER ----------------

def create_sale(
    db: Session,
    customer_id: int | None,
    employee_id: int | None,
    line_items: Sequence,
) -> Sale:
    """Insert a sale with its line items and take the sold units out of stock.

    ``line_items`` are objects with ``item_id``, ``quantity`` and
    ``price_each``. The total comes from the supplied prices, not from the
    current catalog price.
    """
    if not line_items:
        raise ValidationError("At least one line item is required")

    _require(db, Customer, customer_id, "Customer")
    _require(db, Employee, employee_id, "Employee")

    total_amount = sum(
        (line_total(item.quantity, item.price_each) for item in line_items),
        Decimal("0.00"),
    )

    sale = Sale(
        customer_id=customer_id,
        employee_id=employee_id,
        total_amount=total_amount,
    )
    db.add(sale)
    db.flush()

    for item in line_items:
        _require(db, Merchandise, item.item_id, "Merchandise item")
        db.add(
            SalesDetail(
                sales_id=sale.id,
                item_id=item.item_id,
                item_quantity=item.quantity,
                price_each=_money(item.price_each),
            )
        )
        db.flush()
        ledger.adjust(db, item.item_id, -item.quantity)

    logger.info(f"Sale {sale.id} created with {len(line_items)} line items, total {total_amount}")
    return sale


def update_sale_header(
    db: Session,
    sales_id: int,
    customer_id: int | None,
    employee_id: int | None,
) -> Sale:
    # Line items, stock and total are left alone
    if not customer_id:
        raise ValidationError("customer_id is required")

    sale = _get_sale(db, sales_id)
    _require(db, Customer, customer_id, "Customer")
    _require(db, Employee, employee_id or None, "Employee")

    sale.customer_id = customer_id
    sale.employee_id = employee_id or None
    db.flush()

    logger.info(f"Sale {sales_id} header updated")
    return sale


def delete_sale(db: Session, sales_id: int, restock: bool = False) -> None:
    """Remove a sale together with its line items.

    Stock taken by the line items stays taken unless ``restock`` is set.
    """
    sale = _get_sale(db, sales_id)

    if restock:
        for detail in sale.line_items:
            ledger.adjust(db, detail.item_id, detail.item_quantity)

    db.delete(sale)
    db.flush()

    logger.info(f"Sale {sales_id} deleted (restock={restock})")


# ---------------- LINE ITEMS ----------------

def add_line_item(
    db: Session,
    sales_id: int,
    item_id: int,
    quantity: int,
    price_each,
) -> SalesDetail:
    _get_sale(db, sales_id)
    _require(db, Merchandise, item_id, "Merchandise item")

    detail = SalesDetail(
        sales_id=sales_id,
        item_id=item_id,
        item_quantity=quantity,
        price_each=_money(price_each),
    )
    db.add(detail)
    db.flush()

    ledger.adjust(db, item_id, -quantity)
    recompute_total(db, sales_id)

    logger.info(f"Line item {detail.id} added to sale {sales_id}")
    return detail


def update_line_item(
    db: Session,
    sales_detail_id: int,
    quantity: int,
    price_each,
) -> SalesDetail:
    detail = _get_line_item(db, sales_detail_id)

    # Selling more takes more stock, selling less puts it back
    delta = quantity - detail.item_quantity

    detail.item_quantity = quantity
    detail.price_each = _money(price_each)
    db.flush()

    ledger.adjust(db, detail.item_id, -delta)
    recompute_total(db, detail.sales_id)

    logger.info(f"Line item {sales_detail_id} updated (quantity delta {delta})")
    return detail


def delete_line_item(db: Session, sales_detail_id: int) -> None:
    detail = _get_line_item(db, sales_detail_id)
    sales_id = detail.sales_id
    item_id = detail.item_id
    quantity = detail.item_quantity

    db.delete(detail)
    db.flush()

    ledger.adjust(db, item_id, quantity)
    recompute_total(db, sales_id)

    logger.info(f"Line item {sales_detail_id} removed from sale {sales_id}, {quantity} units restocked")


# ---------------- READS ----------------

def get_sale(db: Session, sales_id: int) -> Sale:
    return _get_sale(db, sales_id)


def list_sales(db: Session) -> list[dict]:
    customer = aliased(Customer)
    employee = aliased(Employee)

    rows = (
        db.query(Sale, customer, employee)
        .outerjoin(customer, Sale.customer_id == customer.id)
        .outerjoin(employee, Sale.employee_id == employee.id)
        .order_by(Sale.order_date.desc(), Sale.id.desc())
        .all()
    )

    return [
        {
            "sales_id": sale.id,
            "order_date": sale.order_date,
            "total_amount": sale.total_amount,
            "customer_id": sale.customer_id,
            "employee_id": sale.employee_id,
            "customer_name": _full_name(cust),
            "employee_name": _full_name(emp),
        }
        for sale, cust, emp in rows
    ]


def list_line_items(db: Session, sales_id: int) -> list[dict]:
    rows = (
        db.query(SalesDetail, Merchandise)
        .join(Merchandise, SalesDetail.item_id == Merchandise.id)
        .filter(SalesDetail.sales_id == sales_id)
        .order_by(SalesDetail.id)
        .all()
    )

    return [
        {
            "sales_detail_id": detail.id,
            "sales_id": detail.sales_id,
            "item_id": detail.item_id,
            "item_name": item.item_name,
            "isbn": item.isbn,
            "item_quantity": detail.item_quantity,
            "price_each": detail.price_each,
            "line_total": line_total(detail.item_quantity, detail.price_each),
        }
        for detail, item in rows
    ]


def _full_name(person) -> str | None:
    if person is None:
        return None
    return " ".join(p for p in (person.first_name, person.last_name) if p) or None
