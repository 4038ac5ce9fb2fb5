"""
Shared test fixtures — SQLite test database, test client, sample inputs.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from aluquote.database import Base, get_db
from aluquote.main import app
from aluquote.schemas import EstimateInput


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def shop_window():
    """900 × 1200 clear 5mm window on Series 60, powder coated, ₹300/kg."""
    return EstimateInput(
        width_mm="900",
        height_mm="1200",
        glass_type="Clear",
        glass_thickness_mm=5,
        profile="Series 60",
        finish="Powder Coated",
        cost_per_kg="300",
        accessories_kg="0",
        profit_margin_pct="10",
        discount_pct="0",
    )
