"""
Nice List Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches storage gets its own in-memory SQLite database
       (aiosqlite, foreign keys on), so cascades and constraint failures behave
       exactly as they do against a real database.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:   Settings pointing at an in-memory database
    ├── db_engine:       Engine with the schema created
    ├── db_session:      AsyncSession on that engine
    ├── mock_db_session: AsyncMock session for error-path tests
    └── test_client:     HTTPX AsyncClient talking to a fresh app instance
"""

import os

# Must be set before nicelist.config builds its module-level Settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from nicelist.config import Settings
from nicelist.database import (
    build_engine,
    build_session_factory,
    create_schema,
    dispose_engine,
)

MEMORY_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url=MEMORY_DB_URL, log_level="WARNING")


@pytest_asyncio.fixture
async def db_engine(test_settings):
    """An engine over a fresh in-memory database with all tables created."""
    engine = build_engine(test_settings)
    await create_schema(engine)
    yield engine
    await dispose_engine(engine)


@pytest_asyncio.fixture
async def db_session(db_engine):
    """
    A real AsyncSession bound to the per-test database.

    Usage:
        async def test_add(db_session):
            person_id = await PersonRepository(db_session).add_person("Candy Cane")
    """
    session_factory = build_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock async session for failure-path tests.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client(test_settings):
    """
    An async HTTP client wired to an app with its own in-memory database.

    ASGITransport does not run the lifespan, so the schema is created here.
    """
    from nicelist.main import create_app

    app = create_app(test_settings)
    await create_schema(app.state.engine)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await dispose_engine(app.state.engine)
