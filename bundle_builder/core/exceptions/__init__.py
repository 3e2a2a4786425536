"""
Custom exceptions for Bundle Builder
"""

from .base import BundleBuilderException
from .config import ConfigurationError
from .database import DatabaseError, DatabaseQueryError
from .validation import ValidationError
from .shopify import (
    ShopifyAPIError,
    ResolutionError,
    MutationError,
    OperationFailedError,
    OperationTimeoutError,
    ReconciliationError,
    ConcurrentPollError,
)

__all__ = [
    "BundleBuilderException",
    "ConfigurationError",
    "DatabaseError",
    "DatabaseQueryError",
    "ValidationError",
    "ShopifyAPIError",
    "ResolutionError",
    "MutationError",
    "OperationFailedError",
    "OperationTimeoutError",
    "ReconciliationError",
    "ConcurrentPollError",
]
