from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import urlsplit

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from scalyshop.db.models import Base
from scalyshop.settings import get_settings

logger = logging.getLogger(__name__)


def _validate_database_url(database_url: str) -> str:
    """Perform lightweight structural checks on the resolved database URL.

    SQLite URLs are accepted as-is.  PostgreSQL URLs must name a host and a
    database so misconfigurations fail at startup with a readable message
    instead of on the first query.
    """

    if database_url.startswith("sqlite"):
        return database_url

    parts = urlsplit(database_url)
    if not parts.hostname or not parts.path.strip("/"):
        raise RuntimeError(
            "DATABASE_URL appears malformed. Verify the host and database name are present."
        )
    return database_url


def get_database_url() -> str:
    """Return the database URL after applying the configured fallbacks."""

    return _validate_database_url(get_settings().resolved_database_url)


def get_database_type() -> str:
    """Return ``sqlite`` or ``postgresql`` for the configured database."""

    return get_settings().database_type


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine.

    PostgreSQL engines get a warm connection pool; SQLite relies on the
    driver defaults.  Slow statement logging is attached to every engine.
    """

    url = url or get_database_url()

    if url.startswith("sqlite"):
        engine = create_async_engine(url, future=True, echo=False)
    else:
        engine = create_async_engine(
            url,
            future=True,
            echo=False,
            pool_size=10,  # Maintain 10 warm connections
            max_overflow=20,  # Allow up to 30 total connections
            pool_pre_ping=True,  # Validate connections before use
            pool_recycle=1800,  # Recycle connections every 30 min
            pool_timeout=30,  # Timeout for getting connection from pool
        )

    from scalyshop.monitoring import setup_query_monitoring

    setup_query_monitoring(
        engine,
        slow_query_threshold=get_settings().slow_query_threshold,
    )
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(engine: AsyncEngine) -> None:
    """Create any missing tables for the registered ORM models."""

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified")


# Global engine/session instances for FastAPI dependency injection
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Lazily create a session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections and forget the shared engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency to provide database session.

    Commits when the request handler succeeds and rolls back on error so a
    failed statement never leaves partial state behind.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_async_session_context() -> AsyncIterator[AsyncSession]:
    """
    Async context manager for scripts/CLI tasks that need manual session control.
    """
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
