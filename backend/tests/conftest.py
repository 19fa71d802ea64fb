import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import build_engine, get_db
from init_db import init_database, seed_orders

REFERENCE_ORDER_COUNT = 832
FIRST_ORDER_ID = 10248

# Customer of each order by position, repeated across the dataset.
# Position 11 is the one checked by the skip=11 pagination scenario.
CUSTOMER_CYCLE = [
    "VINET", "TOMSP", "HANAR", "VICTE", "SUPRD", "HANAR", "CHOPS", "RICSU",
    "WELLI", "HILAA", "QUICK", "ERNSH", "CENTC", "OTTIK", "QUEDE", "RATTC",
]


def make_order_records(count: int, first_order_id: int = FIRST_ORDER_ID) -> list[dict]:
    """Build camelCase seed records with explicit, ascending order IDs."""
    base_date = datetime(1996, 7, 4)
    records = []
    for position in range(count):
        customer = CUSTOMER_CYCLE[position % len(CUSTOMER_CYCLE)]
        order_date = base_date + timedelta(days=position)
        records.append({
            "orderId": first_order_id + position,
            "customerId": customer,
            "employeeId": position % 9 + 1,
            "orderDate": order_date.isoformat(),
            "requiredDate": (order_date + timedelta(days=28)).isoformat(),
            "shipVia": position % 3 + 1,
            "freight": str(Decimal("32.38") + position),
            "shipName": f"{customer} shipping",
            "shipCity": "Reims",
            "shipCountry": "France",
            "orderDetails": [
                {
                    "productId": 11 + line,
                    "quantity": 12 + line,
                    "unitPrice": "14.00",
                    "discount": "0",
                }
                for line in range(position % 3 + 1)
            ],
        })

    if records:
        records[0].update({
            "shipName": "Vins et alcools Chevalier",
            "shipAddress": "59 rue de l'Abbaye",
        })
    return records


@pytest.fixture
def engine():
    """In-memory database shared by every session of one test"""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create in-memory database for testing"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def reference_orders(db_session):
    """The 832-order reference dataset, already committed."""
    records = make_order_records(REFERENCE_ORDER_COUNT)
    seed_orders(db_session, records)
    return records


@pytest.fixture
def single_order(db_session):
    """One stored order (ID 1) with a single line."""
    records = make_order_records(1, first_order_id=1)
    seed_orders(db_session, records)
    return records[0]


@pytest.fixture
def client(session_factory):
    """API client whose requests use the in-memory database."""
    from main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
