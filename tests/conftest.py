"""Pytest configuration and fixtures."""

import os

# Keep the application's own engine off the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import UTC, date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eatmefirst.api.dependencies import get_inventory_service
from eatmefirst.database import Base, get_db
from eatmefirst.main import app
from eatmefirst.services.inventory_service import InventoryService
from eatmefirst.services.item_store import ItemStore

# In-memory SQLite shared by every connection in the test session
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

NOW = datetime(2026, 3, 10, 9, 30, tzinfo=UTC)
TODAY = NOW.date()


def days_from_today(days: int) -> date:
    return TODAY + timedelta(days=days)


class FixedClock:
    """Clock returning a pinned instant that tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int) -> None:
        self.now += timedelta(days=days)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from eatmefirst import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def today(clock):
    return clock.now.date()


@pytest.fixture
def store(db):
    """Initialized item store on the test session."""
    item_store = ItemStore(lambda: db)
    item_store.initialize()
    return item_store


@pytest.fixture
def inventory(store, clock):
    """Initialized inventory facade with a pinned clock."""
    service = InventoryService(store, clock=clock, expiring_soon_days=3)
    service.initialize()
    return service


@pytest.fixture
def make_item(store):
    """Create an item directly in the store, bypassing the facade's refresh."""

    def _make_item(name="Milk", days=5, category="Fridge", **fields):
        return store.create(
            {"name": name, "expiry_date": days_from_today(days), "category": category, **fields}
        )

    return _make_item


@pytest.fixture(scope="function")
def client(db, clock):
    """Create a test client with database and clock overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    def override_get_inventory_service():
        service = InventoryService(ItemStore(lambda: db), clock=clock, expiring_soon_days=3)
        service.initialize(create_schema=False)
        return service

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_inventory_service] = override_get_inventory_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
