# backend/modules/analytics/tests/conftest.py

import pytest
from typing import Generator
from datetime import datetime
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from core.database import Base, get_db
from modules.retail.models.retail_models import Product, InventoryEntry, Sale


# Test database setup
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def create_test_database():
    """Create test database tables."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a test database session."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def client(db_session: Session):
    """Create a test client."""
    from app.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def march_records(db_session: Session) -> Product:
    """
    One product bought twice (10.00 in January, 12.00 in February)
    and sold once in March: 5 units at 20.00.
    """
    product = Product(sku="P1", name="Product One")
    db_session.add(product)
    db_session.flush()

    db_session.add_all([
        InventoryEntry(
            product_id=product.id,
            purchase_price=Decimal("10.00"),
            quantity_received=20,
            date_purchased=datetime(2024, 1, 1),
            grn_number="GRN-JAN",
        ),
        InventoryEntry(
            product_id=product.id,
            purchase_price=Decimal("12.00"),
            quantity_received=20,
            date_purchased=datetime(2024, 2, 1),
            grn_number="GRN-FEB",
        ),
        Sale(
            product_id=product.id,
            sales_price=Decimal("20.00"),
            quantity_sold=5,
            date_sold=datetime(2024, 3, 1),
        ),
    ])
    db_session.commit()
    return product


@pytest.fixture
def this_month_records(db_session: Session) -> Product:
    """
    A product with 33 units received and 30 sold at the start of the
    current month: 3 left, selling one a day.
    """
    now = datetime.now()
    product = Product(sku="LOW-1", name="Scarce Scarf")
    db_session.add(product)
    db_session.flush()

    db_session.add_all([
        InventoryEntry(
            product_id=product.id,
            purchase_price=Decimal("6.00"),
            quantity_received=33,
            date_purchased=datetime(now.year, now.month, 1),
            grn_number="GRN-LOW",
        ),
        Sale(
            product_id=product.id,
            sales_price=Decimal("10.00"),
            quantity_sold=30,
            date_sold=datetime(now.year, now.month, 1),
        ),
    ])
    db_session.commit()
    return product
