"""Database engine and session management."""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from userhub.config import Settings, get_settings
from userhub.db.models import Base

logger = logging.getLogger(__name__)

# Global instances
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def create_engine(settings: Settings) -> AsyncEngine:
    """Create an async engine for ``settings.DATABASE_URL``."""
    kwargs: dict = {"echo": settings.DB_ECHO}
    # SQLite drivers do not take queue pool arguments
    if not settings.DATABASE_URL.startswith("sqlite"):
        kwargs["pool_size"] = settings.DB_POOL_SIZE
        kwargs["max_overflow"] = settings.DB_MAX_OVERFLOW
    return create_async_engine(settings.DATABASE_URL, **kwargs)


async def init_db(settings: Optional[Settings] = None) -> async_sessionmaker[AsyncSession]:
    """Initialize the engine and session factory.

    Returns:
        Session factory bound to the new engine
    """
    global _engine, _session_factory

    settings = settings or get_settings()

    _engine = create_engine(settings)
    _session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    try:
        async with _engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Connected to database: %s", _engine.url.render_as_string(hide_password=True))
    except Exception as e:
        logger.warning("Failed to connect to database: %s", e)

    return _session_factory


async def create_tables() -> None:
    """Create all tables that do not exist yet."""
    if _engine is None:
        await init_db()
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created: %s", ", ".join(Base.metadata.tables))


async def close_db() -> None:
    """Dispose of the engine."""
    global _engine, _session_factory

    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory created by :func:`init_db`."""
    if _session_factory is None:
        raise RuntimeError("Database is not initialized; call init_db() first")
    return _session_factory
