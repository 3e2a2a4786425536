"""
Application-level constants
"""

PROJECT_NAME = "Bundle Builder"
VERSION = "1.0.0"
DEFAULT_PORT = 8001
HEALTH_CHECK_TIMEOUT = 5

ENVIRONMENT_DEVELOPMENT = "development"
ENVIRONMENT_PRODUCTION = "production"

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./feedback.db"

# Operation polling
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_POLL_MAX_ATTEMPTS = 60
DEFAULT_POLL_TIMEOUT_SECONDS = 120.0

# Outbound request limiter
DEFAULT_MAX_CONCURRENT_REQUESTS = 4

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "DEFAULT_PORT",
    "HEALTH_CHECK_TIMEOUT",
    "ENVIRONMENT_DEVELOPMENT",
    "ENVIRONMENT_PRODUCTION",
    "DEFAULT_DATABASE_URL",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "DEFAULT_POLL_MAX_ATTEMPTS",
    "DEFAULT_POLL_TIMEOUT_SECONDS",
    "DEFAULT_MAX_CONCURRENT_REQUESTS",
]
