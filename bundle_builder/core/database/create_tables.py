"""
Create database tables from the SQLAlchemy metadata
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from bundle_builder.core.logging import get_logger
from .engine import get_engine
from .models import Base

logger = get_logger(__name__)


async def create_all_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Create every table that does not exist yet"""
    engine = engine or await get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified/created", tables=len(Base.metadata.tables))
