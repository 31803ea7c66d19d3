"""
Nice List Backend — Database Engine & Session Management
==========================================================

What:  Async SQLAlchemy engine construction, session factory, schema creation,
       and the per-request FastAPI session dependency.
How:   `build_engine()` and `build_session_factory()` are called by the
       application factory, which keeps the results on `app.state`. Nothing in
       this module holds a process-wide engine; every consumer receives its
       handle explicitly (the app state, a session, or a repository).
Who:   The application factory, route dependencies, and the test suite.

Connection Pooling Strategy:
    Server databases (PostgreSQL):
        pool_size / max_overflow / pool_pre_ping come from settings,
        pool_recycle=3600 recycles long-lived connections.
    SQLite:
        File databases use the driver's default pool.
        In-memory databases use StaticPool so every session shares the one
        connection that holds the data.
        Every new SQLite connection runs `PRAGMA foreign_keys=ON`; without it
        SQLite ignores foreign keys and cascade deletes silently do nothing.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from nicelist.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers its table on this shared metadata, which
    `create_schema()` uses to issue CREATE TABLE statements.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turns on foreign-key enforcement for a freshly opened SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(app_settings: Settings) -> AsyncEngine:
    """
    Create an async engine for the configured database.

    Args:
        app_settings: Settings carrying database_url and pool options

    Returns:
        A configured AsyncEngine. No connection is opened until first use.
    """
    url = make_url(app_settings.database_url)
    engine_kwargs: Dict[str, Any] = {
        # Echo SQL only when debugging; it is very noisy otherwise
        "echo": app_settings.log_level == "DEBUG",
    }

    is_sqlite = url.get_backend_name() == "sqlite"
    if is_sqlite:
        if url.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update(
            pool_size=app_settings.db_pool_size,
            max_overflow=app_settings.db_max_overflow,
            pool_pre_ping=app_settings.db_pool_pre_ping,
            pool_recycle=3600,
        )

    engine = create_async_engine(app_settings.database_url, **engine_kwargs)

    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug("Database engine created for backend '%s'", url.get_backend_name())
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the session factory bound to an engine.

    expire_on_commit=False keeps loaded attributes readable after a commit,
    outside of any lazy-load round trip.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """
    Create the people, infractions and appeals tables if they are missing.

    Existing tables are left untouched; this is not a migration mechanism.
    """
    # Registers every model on Base.metadata
    from nicelist import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured: %s", ", ".join(sorted(Base.metadata.tables)))


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the factory stored on app.state
        2. Yields it to the route (repositories perform their queries)
        3. On success: commits whatever the repositories left pending
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session, returning its connection to the pool

    Example usage in a route:
        @router.get("/people")
        async def list_people(db: AsyncSession = Depends(get_db_session)):
            return await PersonRepository(db).list_people()
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine(engine: AsyncEngine) -> None:
    """Closes every pooled connection. Called on application shutdown."""
    await engine.dispose()
