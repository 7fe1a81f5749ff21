"""Pytest fixtures for testing"""

import pytest
from dataclasses import asdict
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from redflag.api.main import create_app
from redflag.infrastructure.database.models import Base
from redflag.infrastructure.database.session import get_db
from redflag.domain.models import BankTransaction, CustomerData, LedgerEntry


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_ledger() -> list[LedgerEntry]:
    """Two months of revenue plus a mix of business and personal expenses"""
    return [
        LedgerEntry("2024-11-15", "Product Sales", "Revenue", 80000, "revenue"),
        LedgerEntry("2024-12-15", "Product Sales", "Revenue", 175000, "revenue"),
        LedgerEntry("2024-11-04", "Warehouse Lease", "Rent", 12000, "expense"),
        LedgerEntry("2024-11-15", "Walt Disney World", "Office Supplies", 5000, "expense"),
        LedgerEntry("2024-12-10", "Staples", "Office Supplies", 240.75, "expense"),
    ]


@pytest.fixture
def sample_bank() -> list[BankTransaction]:
    return [
        BankTransaction("2024-11-20", "Customer Payments", 78000, "deposit"),
        BankTransaction("2024-12-20", "Customer Payments", 75000, "deposit"),
        BankTransaction("2024-11-04", "Warehouse Lease", 12000, "withdrawal"),
    ]


@pytest.fixture
def sample_customers() -> list[CustomerData]:
    return [
        CustomerData("Big Box Retail Co", 45000, 42000, 18000, "down", -60, False),
        CustomerData("Metro Supplies Inc", 32000, 35000, 38000, "up", 19, False),
        CustomerData("Regional Hardware", 28000, 27500, 29000, "stable", 4, False),
    ]


@pytest.fixture
def analysis_payload(
    sample_ledger: list[LedgerEntry],
    sample_bank: list[BankTransaction],
    sample_customers: list[CustomerData],
) -> dict:
    """JSON body accepted by /v1/analyze and /v1/scans"""
    return {
        "company_name": "Acme Distribution LLC",
        "ledger_entries": [asdict(e) for e in sample_ledger],
        "bank_transactions": [asdict(t) for t in sample_bank],
        "customers": [asdict(c) for c in sample_customers],
        "reported_net_income": 185000,
        "other_adjustments": 15000,
    }
