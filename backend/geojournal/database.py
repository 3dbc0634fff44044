"""
GeoJournal Backend — Database Lifecycle & Session Management
=============================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI session dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` object owns the engine and session factory. It is created
       once in the application lifespan, stored on `app.state.database`, and
       disposed on shutdown. Request handlers receive sessions through the
       `get_db_session` dependency instead of touching a module-level engine.
Who:   Used by `geojournal.main` (lifecycle) and route handlers (sessions).

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite (tests, local development) uses SQLAlchemy's default pool for the
    dialect, so pool sizing arguments are not passed.
"""

import logging
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import DateTime, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from geojournal.config import settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers every model with a shared metadata object, which Alembic reads
    for --autogenerate and `Database.create_tables()` uses in development.
    """
    pass


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp that always comes back in UTC.

    PostgreSQL keeps the offset; SQLite drops it and returns naive values.
    Values are converted to UTC before storing and naive values read back
    are tagged as UTC, so every dialect yields the same aware datetime.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Database:
    """
    Process-scoped owner of the async engine and its session factory.

    Lifecycle:
        database = Database(url)      # startup
        await database.create_tables()  (optional, dev/test only)
        ... sessions via database.session() ...
        await database.dispose()      # shutdown
    """

    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.database_url
        engine_kwargs = {"echo": settings.log_level == "DEBUG"}
        if not self.url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        # expire_on_commit=False: each gateway write commits, and handlers still
        # read the record's attributes afterwards to build the response
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_tables(self) -> None:
        """Create all tables known to `Base.metadata` (no-op for existing tables)."""
        # Imported for their side effect of registering with Base.metadata
        from geojournal.models import entry, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> bool:
        """Run `SELECT 1`; used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections. Called during application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the lifespan-owned `Database`
        2. Yields it to the route handler
        3. On success: commits anything still pending
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Gateway writes commit on their own, so step 3 is normally a no-op; it
    stays to keep the session boundary explicit.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
