"""
Logging module for Bundle Builder
"""

from .logger import get_logger, setup_logging, StructuredLogger
from .formatters import JSONFormatter, ConsoleFormatter
from .config import LoggingConfig

__all__ = [
    "get_logger",
    "setup_logging",
    "StructuredLogger",
    "JSONFormatter",
    "ConsoleFormatter",
    "LoggingConfig",
]
