# app/seed.py
#
# Restores every table to a known seed state. Sales and reorders are
# loaded through the services so seeded totals and stock agree.

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.database import Base
from app.models.customers import Customer
from app.models.employees import Employee
from app.models.merchandise import Merchandise
from app.models.reorders import Reorder
from app.models.suppliers import Supplier
from app.schemas.sale import LineItemCreate
from app.services import sales as sales_service
from app.services.transaction import run_atomic

logger = logging.getLogger("app")

SUPPLIERS = [
    {"company_name": "Penguin Random House", "contact_name": "Maria Lopez", "email": "orders@prh.example.com", "phone": "212-555-0101"},
    {"company_name": "HarperCollins", "contact_name": "James Reid", "email": "trade@harpercollins.example.com", "phone": "212-555-0144"},
    {"company_name": "Moleskine Supply Co", "contact_name": "Anna Ricci", "email": "sales@moleskine.example.com", "phone": "646-555-0190"},
]

CUSTOMERS = [
    {"first_name": "Ava", "last_name": "Nguyen", "email": "ava.nguyen@example.com", "address_line1": "12 Elm St", "zip_code": "97331"},
    {"first_name": "Liam", "last_name": "Carter", "email": "liam.carter@example.com", "address_line1": "480 Oak Ave", "address_line2": "Apt 3", "zip_code": "97330"},
    {"first_name": "Sofia", "last_name": "Patel", "email": "sofia.patel@example.com", "address_line1": "9 Birch Ln", "zip_code": "97333"},
]

EMPLOYEES = [
    {"first_name": "Noah", "last_name": "Kim", "email": "noah.kim@bookstore.example.com", "hire_date": date(2021, 3, 15)},
    {"first_name": "Emma", "last_name": "Brooks", "email": "emma.brooks@bookstore.example.com", "hire_date": date(2023, 9, 1)},
]

# supplier is an index into SUPPLIERS
MERCHANDISE = [
    {"item_name": "The Left Hand of Darkness", "isbn": "9780441478125", "price": Decimal("16.99"), "item_quantity": 40, "supplier": 0},
    {"item_name": "Beloved", "isbn": "9781400033416", "price": Decimal("15.00"), "item_quantity": 25, "supplier": 0},
    {"item_name": "Their Eyes Were Watching God", "isbn": "9780061120060", "price": Decimal("14.99"), "item_quantity": 30, "supplier": 1},
    {"item_name": "Classic Notebook, Ruled", "isbn": None, "price": Decimal("21.50"), "item_quantity": 60, "supplier": 2},
    {"item_name": "Bookmark Set", "isbn": None, "price": Decimal("4.25"), "item_quantity": 120, "supplier": None},
]

# (customer, employee, [(item, quantity)]) as indexes into the lists above
SALES = [
    (0, 0, [(0, 1), (4, 2)]),
    (1, 1, [(1, 2)]),
    (2, 0, [(2, 1), (3, 1), (4, 1)]),
]

# (item, supplier, quantity, status)
REORDERS = [
    (1, 0, 20, "pending"),
    (2, 1, 15, "ordered"),
    (3, 2, 30, "received"),
    (0, 0, 10, "cancelled"),
]


def _load_seed_data(db: Session) -> None:
    suppliers = [Supplier(**row) for row in SUPPLIERS]
    customers = [Customer(**row) for row in CUSTOMERS]
    employees = [Employee(**row) for row in EMPLOYEES]
    db.add_all(suppliers + customers + employees)
    db.flush()

    items = []
    for row in MERCHANDISE:
        supplier = row["supplier"]
        items.append(
            Merchandise(
                item_name=row["item_name"],
                isbn=row["isbn"],
                price=row["price"],
                item_quantity=row["item_quantity"],
                supplier_id=suppliers[supplier].id if supplier is not None else None,
            )
        )
    db.add_all(items)
    db.flush()

    for customer, employee, lines in SALES:
        sales_service.create_sale(
            db,
            customers[customer].id,
            employees[employee].id,
            [
                LineItemCreate(item_id=items[i].id, quantity=qty, price_each=items[i].price)
                for i, qty in lines
            ],
        )

    # Inserted directly: "received" reorders are history, not a fresh receipt
    db.add_all(
        Reorder(
            item_id=items[item].id,
            supplier_id=suppliers[supplier].id,
            quantity=quantity,
            status=status,
        )
        for item, supplier, quantity, status in REORDERS
    )
    db.flush()


def reset_database(db: Session) -> None:
    """Drop and recreate every table, then load the seed rows."""
    bind = db.get_bind()

    db.close()
    Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)

    run_atomic(db, _load_seed_data)
    logger.info("Database reset to seed state")
