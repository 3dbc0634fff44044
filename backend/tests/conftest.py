"""
GeoJournal Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── database:         Database on a fresh SQLite file (aiosqlite), tables created
    ├── store:            DataStore bound to a session of `database`
    ├── geocoder:         FakeGeocoder with a small table of known places
    ├── mock_db_session:  AsyncMock session for store-failure paths
    ├── failing_store:    DataStore whose every call raises a driver error
    └── test_client:      HTTPX AsyncClient over ASGITransport
"""

import os

# Must run before geojournal.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["GOOGLE_MAPS_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DB_CREATE_TABLES"] = "false"

from typing import Dict, List, Tuple  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402

from geojournal.database import Database  # noqa: E402
from geojournal.exceptions import GeocodeError  # noqa: E402
from geojournal.schemas.entry import Coordinates  # noqa: E402
from geojournal.services.geocoding_base import GeocodingService  # noqa: E402
from geojournal.store import DataStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════

class FakeGeocoder(GeocodingService):
    """Resolves a fixed set of place names; anything else is 'not found'."""

    PLACES: Dict[str, Tuple[float, float]] = {
        "Manila, Philippines": (14.5995, 120.9842),
        "Quezon City, Philippines": (14.6760, 121.0437),
        "Baguio": (16.4023, 120.5960),
    }

    def __init__(self):
        self.calls: List[str] = []
        self.closed = False

    async def resolve(self, location_name: str) -> Coordinates:
        self.calls.append(location_name)
        if location_name not in self.PLACES:
            raise GeocodeError()
        latitude, longitude = self.PLACES[location_name]
        return Coordinates(latitude=latitude, longitude=longitude)

    def is_configured(self) -> bool:
        return True

    async def aclose(self) -> None:
        self.closed = True


def store_error() -> OperationalError:
    """A driver-level failure, as SQLAlchemy raises it when the DB is unreachable."""
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(tmp_path):
    """A real Database on a throwaway SQLite file, with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'geojournal_test.db'}")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def store(database):
    """DataStore over one session of the test database."""
    async with database.session() as session:
        yield DataStore(session)


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = store_error()
        await service.list_users(DataStore(mock_db_session))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def failing_store(mock_db_session):
    """DataStore whose reads and commits all fail at the driver level."""
    mock_db_session.execute.side_effect = store_error()
    mock_db_session.commit.side_effect = store_error()
    return DataStore(mock_db_session)


@pytest_asyncio.fixture
async def test_client(database, geocoder):
    """
    HTTPX AsyncClient talking to a fresh app.

    ASGITransport does not run the lifespan, so the test database and the
    fake geocoder are installed on app.state directly.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from geojournal.main import create_app

    app = create_app()
    app.state.database = database
    app.state.geocoder = geocoder
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
