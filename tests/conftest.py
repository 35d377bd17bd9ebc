"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from origination_gateway.api.main import create_app
from origination_gateway.infrastructure.database.models import Base
from origination_gateway.infrastructure.database.session import get_db, engine_options
from origination_gateway.domain.models import AffordabilityData, AffordabilityItem


# Test database
TEST_DATABASE_URL = "sqlite:///./test_origination.db"
engine = create_engine(TEST_DATABASE_URL, **engine_options(TEST_DATABASE_URL))
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
def sample_affordability() -> AffordabilityData:
    """Declared affordability lines as captured by the application form"""
    return AffordabilityData(
        income=[
            AffordabilityItem("Bonus", 0),
            AffordabilityItem("Rental Income", 0),
            AffordabilityItem("Business Income", 0),
            AffordabilityItem("Maintenance/spousal support", 0),
            AffordabilityItem("Other", 0),
        ],
        expenses=[
            AffordabilityItem("Levies", 200),
            AffordabilityItem("Municipal rates and taxes", 0),
            AffordabilityItem("Car repayment", 500),
            AffordabilityItem("Rent", 300),
            AffordabilityItem("DSTV", 200),
            AffordabilityItem("Groceries", 0),
        ],
        deductions=[
            AffordabilityItem("PAYE", 100),
            AffordabilityItem("UIF", 0),
            AffordabilityItem("Other", 200),
        ],
    )
