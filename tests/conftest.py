"""Shared fixtures: an in-memory database, a seeded catalog and an API client."""

import os

os.environ.setdefault("AUTH_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.rate_limiter import limiter
from app.database import Base, get_db
from app.main import app
from app.models.customers import Customer
from app.models.employees import Employee
from app.models.merchandise import Merchandise
from app.models.suppliers import Supplier


@pytest.fixture
def engine():
    """Provide a fresh in-memory SQLite engine with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog(db):
    """Two books with known ids, prices and stock counts, plus customers 1 and 2
    and employee 1 for sales to point at."""
    db.add_all(
        [
            Customer(id=1, first_name="Ava", last_name="Nguyen"),
            Customer(id=2, first_name="Liam", last_name="Carter"),
            Employee(id=1, first_name="Noah", last_name="Kim"),
        ]
    )
    supplier = Supplier(company_name="Ace Books")
    db.add(supplier)
    db.flush()

    items = {
        7: Merchandise(id=7, item_name="Dune", isbn="9780441172719", price=Decimal("10.00"), item_quantity=50, supplier_id=supplier.id),
        8: Merchandise(id=8, item_name="Neuromancer", isbn="9780441569595", price=Decimal("15.00"), item_quantity=20),
    }
    db.add_all(items.values())
    db.commit()
    return items


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False

    yield TestClient(app)

    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def make_token():
    def _make(claims=None):
        payload = {"sub": "auth0|clerk-1"}
        payload.update(claims or {})
        return jwt.encode(payload, settings.AUTH_SECRET_KEY, algorithm=settings.AUTH_ALGORITHM)

    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}
