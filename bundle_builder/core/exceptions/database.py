"""
Database-related exceptions
"""

from typing import Optional, Dict, Any

from .base import BundleBuilderException


class DatabaseError(BundleBuilderException):
    """Base exception for database errors"""

    def __init__(
        self,
        message: str,
        error_code: str = "DATABASE_ERROR",
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message, error_code=error_code, details=details, cause=cause
        )


class DatabaseQueryError(DatabaseError):
    """Raised when a database query fails"""

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        query_details = {"query": query}
        if details:
            query_details.update(details)
        super().__init__(
            message=message,
            error_code="DATABASE_QUERY_ERROR",
            details=query_details,
            cause=cause,
        )
