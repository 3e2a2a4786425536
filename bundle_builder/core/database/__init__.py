"""
Database module for Bundle Builder

Uses SQLAlchemy async for all database operations.
"""

from .engine import (
    get_engine,
    close_engine,
    check_engine_health,
    create_engine,
    get_database_url,
)
from .session import (
    get_session_factory,
    get_transaction_context,
    get_db_session,
)
from .create_tables import create_all_tables

__all__ = [
    "get_engine",
    "close_engine",
    "check_engine_health",
    "create_engine",
    "get_database_url",
    "get_session_factory",
    "get_transaction_context",
    "get_db_session",
    "create_all_tables",
]
