# backend/modules/retail/tests/conftest.py

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
from modules.retail.services.record_store import RecordStore


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
def override_get_db(db_session: Session):
    """Override the get_db dependency for testing."""
    def _override_get_db():
        yield db_session

    return _override_get_db


@pytest.fixture
def client(override_get_db):
    """Create a test client."""
    from app.main import app

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def record_store(db_session: Session) -> RecordStore:
    return RecordStore(db_session)


@pytest.fixture
def sample_product(db_session: Session) -> Product:
    product = Product(sku="TEE-001", name="Cotton Tee", description="Plain white tee")
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture
def stocked_product(db_session: Session, sample_product: Product) -> Product:
    """Product with two receipts and two sales"""
    db_session.add_all([
        InventoryEntry(
            product_id=sample_product.id,
            purchase_price=Decimal("5.00"),
            quantity_received=20,
            date_purchased=datetime(2024, 1, 2, 9, 0),
            grn_number="GRN-0001",
        ),
        InventoryEntry(
            product_id=sample_product.id,
            purchase_price=Decimal("6.00"),
            quantity_received=10,
            date_purchased=datetime(2024, 2, 2, 9, 0),
            grn_number="GRN-0002",
        ),
        Sale(
            product_id=sample_product.id,
            sales_price=Decimal("12.00"),
            quantity_sold=3,
            date_sold=datetime(2024, 2, 10, 15, 30),
        ),
        Sale(
            product_id=sample_product.id,
            sales_price=Decimal("12.00"),
            quantity_sold=2,
            date_sold=datetime(2024, 1, 20, 11, 0),
        ),
    ])
    db_session.commit()
    return sample_product
