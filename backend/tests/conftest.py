"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched for code that bypasses get_db (readiness probe)

Design Decisions:
    - SQLite in-memory: fast, no external dependency; ON CONFLICT and RETURNING
      behave as on PostgreSQL for the statements exercised here
    - raise_app_exceptions=False: unhandled errors surface as the 500 the
      catch-all handler produces, like a real client sees
"""

import os

# Ensure tests never reach a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

import app.infrastructure.database as db_module  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.infrastructure.database import get_db, DatabaseSessionManager  # noqa: E402
from app.infrastructure.name_repositories import (  # noqa: E402
    SqlDuplicateNameRepository, SqlGeoLocationRepository, SqlNameEntryRepository,
)
from app.main import app  # noqa: E402
from app.models.geo_location import GeoLocation  # noqa: E402
from app.models.name_entry import NameEntry  # noqa: E402
from app.services.name_entry_service import NameEntryService  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def name_service(test_db):
    return NameEntryService(
        test_db,
        SqlNameEntryRepository(test_db),
        SqlDuplicateNameRepository(test_db),
    )


@pytest.fixture
def geo_repository(test_db):
    return SqlGeoLocationRepository(test_db)


@pytest.fixture
async def seed_geo(test_db):
    """Insert the IBADAN geolocation."""
    geo = GeoLocation(place="IBADAN", region="NWY")
    test_db.add(geo)
    await test_db.commit()
    return geo


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


def make_entry(name: str, **fields) -> NameEntry:
    """Transient NameEntry with sensible defaults for service tests."""
    fields.setdefault("etymology", [])
    fields.setdefault("submitted_by", "Not Available")
    fields.setdefault("is_indexed", False)
    return NameEntry(name=name, **fields)


@pytest.fixture
def entry_factory():
    return make_entry
