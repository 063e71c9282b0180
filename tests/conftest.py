"""
Shared test fixtures: SQLite state database, durable slot, store, test client.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point the app at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from revestmaster.database import Base
from revestmaster.main import app
from revestmaster.persistence import StateSlot
from revestmaster.store import ProjectStore, get_store


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def slot():
    """Durable slot on the test database."""
    return StateSlot(session_factory=TestingSessionLocal)


@pytest.fixture
def store(slot):
    """Freshly loaded (empty) store."""
    s = ProjectStore(slot)
    s.load()
    return s


@pytest.fixture
def client(store):
    """FastAPI test client bound to the test store."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def kitchen_spec():
    """4m × 3m, 60×60 tile, 3mm joint, 10% waste, 6 kg/m² mortar in 20 kg bags."""
    return {
        "length_m": 4,
        "width_m": 3,
        "tileLength_cm": 60,
        "tileWidth_cm": 60,
        "groutJoint_mm": 3,
        "wasteMargin_pct": 10,
        "mortarConsumption_kg_per_m2": 6,
        "mortarBagWeight_kg": 20,
    }


@pytest.fixture
def bathroom_spec():
    """5m × 4m, 45×45 tile, 2mm joint, defaults for the rest."""
    return {
        "length_m": 5,
        "width_m": 4,
        "tileLength_cm": 45,
        "tileWidth_cm": 45,
        "groutJoint_mm": 2,
    }
