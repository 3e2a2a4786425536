"""
SQLAlchemy async engine configuration for Bundle Builder
"""

import asyncio
from typing import Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from bundle_builder.core.config.settings import settings
from bundle_builder.core.logging import get_logger

logger = get_logger(__name__)

# Global engine instance
_engine: Optional[AsyncEngine] = None
_engine_lock = asyncio.Lock()


def get_database_url(database_url: Optional[str] = None) -> str:
    """Get the database URL with proper async driver"""
    database_url = database_url or settings.database.DATABASE_URL

    # Convert to async URL if needed
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("sqlite://"):
        database_url = database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    return database_url


def _is_memory_sqlite(database_url: str) -> bool:
    return "sqlite" in database_url and (
        database_url.endswith(":memory:") or database_url.endswith("://")
    )


def create_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create SQLAlchemy async engine"""
    database_url = get_database_url(database_url)

    engine_kwargs = {
        "url": database_url,
        "echo": settings.database.SQLALCHEMY_ECHO,
    }

    if _is_memory_sqlite(database_url):
        # One shared connection, otherwise every checkout sees an empty database
        engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["poolclass"] = NullPool

    engine = create_async_engine(**engine_kwargs)

    if "sqlite" in database_url:

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.close()

    return engine


async def get_engine() -> AsyncEngine:
    """Get or create the process-wide async database engine"""
    global _engine

    if _engine is None:
        async with _engine_lock:
            if _engine is None:
                _engine = create_engine()
                logger.info("Database engine created")

    return _engine


async def check_engine_health(engine: Optional[AsyncEngine] = None) -> bool:
    """Check if the database engine can execute a trivial query"""
    try:
        engine = engine or await get_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database engine health check failed: {e}")
        return False


async def close_engine() -> None:
    """Close the database engine"""
    global _engine

    if _engine is not None:
        try:
            await _engine.dispose()
        finally:
            _engine = None
            logger.info("Database engine disposed")
