"""
Configuration module for Bundle Builder
"""

from .settings import settings, Settings
from .settings import (
    DatabaseSettings,
    ShopifySettings,
    PollingSettings,
    LoggingSettings,
)

__all__ = [
    "settings",
    "Settings",
    "DatabaseSettings",
    "ShopifySettings",
    "PollingSettings",
    "LoggingSettings",
]
