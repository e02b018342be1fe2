import os

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from inventory_backend.app.core.config import settings
from inventory_backend.app.db import session as db_session_module
from inventory_backend.app.db.base import Base
from inventory_backend.app.db.models.models_v1 import InventoryItem, Product, Supplier
from inventory_backend.app.db.session import SessionLocal
from inventory_backend.app.main import app

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(test_engine, "connect")
def _sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves FK enforcement off per connection
    if test_engine.dialect.name == "sqlite":
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Application code goes through SessionLocal; point it at the test engine
db_session_module.engine = test_engine
SessionLocal.configure(bind=test_engine)


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Fresh schema for every test."""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_REQUIRED", False)
    monkeypatch.setattr(settings, "REQUIRE_SUPPLIER_ID", False)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def db_session() -> Session:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seed_products(db_session):
    """
    Supplier 1 with products 1 and 2 (ids assigned in insert order on a fresh schema).
    """
    supplier = Supplier(name="Acme", contact_info="acme@example.com")
    db_session.add(supplier)
    db_session.flush()
    db_session.add_all(
        [
            Product(name="Widget", cost_price=Decimal("2.50"), supplier_id=supplier.supplier_id),
            Product(name="Gadget", cost_price=Decimal("10.00"), supplier_id=supplier.supplier_id),
        ]
    )
    db_session.commit()
    return [1, 2]


@pytest.fixture
def seed_inventory(db_session, seed_products):
    db_session.add_all(
        [
            InventoryItem(product_id=1, warehouse="Main", quantity=10),
            InventoryItem(product_id=2, warehouse="Main", quantity=3),
            InventoryItem(product_id=2, warehouse="Overflow", quantity=1),
        ]
    )
    db_session.commit()


@pytest.fixture
def make_order():
    """Builder for POST /api/orders bodies (Alice, 2024-01-01, pending)."""

    def _make(products, **overrides):
        payload = {
            "customerName": "Alice",
            "orderDate": date(2024, 1, 1).isoformat(),
            "status": "pending",
            "products": products,
        }
        payload.update(overrides)
        return payload

    return _make
