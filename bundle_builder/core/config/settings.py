"""
Application settings and configuration management
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bundle_builder.shared.constants.app import (
    PROJECT_NAME,
    VERSION,
    DEFAULT_PORT,
    HEALTH_CHECK_TIMEOUT,
    ENVIRONMENT_DEVELOPMENT,
    DEFAULT_DATABASE_URL,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_MAX_ATTEMPTS,
    DEFAULT_POLL_TIMEOUT_SECONDS,
    DEFAULT_MAX_CONCURRENT_REQUESTS,
)
from bundle_builder.shared.constants.shopify import (
    SHOPIFY_API_VERSION,
    SHOPIFY_ADMIN_URL,
    BUNDLE_TAG,
    DEFAULT_BUNDLE_LIST_PAGE_SIZE,
    DEFAULT_BUNDLE_LIST_MAX_PAGES,
)
from bundle_builder.core.exceptions import ConfigurationError


class DatabaseSettings(BaseSettings):
    """Database configuration settings"""

    DATABASE_URL: str = Field(default=DEFAULT_DATABASE_URL)
    # Control SQLAlchemy logging of SQL and pool events
    SQLALCHEMY_ECHO: bool = Field(default=False)

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v):
        if not v:
            return DEFAULT_DATABASE_URL
        return v


class ShopifySettings(BaseSettings):
    """Shopify configuration settings"""

    SHOPIFY_API_VERSION: str = Field(default=SHOPIFY_API_VERSION)
    SHOPIFY_ADMIN_URL: str = Field(default=SHOPIFY_ADMIN_URL)

    # Offline token used when the session layer does not forward one
    SHOPIFY_ACCESS_TOKEN: str = Field(default="")

    # API Configuration
    SHOPIFY_REQUEST_TIMEOUT: float = Field(default=30.0)
    SHOPIFY_MAX_CONCURRENT_REQUESTS: int = Field(
        default=DEFAULT_MAX_CONCURRENT_REQUESTS
    )

    # Bundle listing
    BUNDLE_TAG: str = Field(default=BUNDLE_TAG)
    BUNDLE_LIST_PAGE_SIZE: int = Field(default=DEFAULT_BUNDLE_LIST_PAGE_SIZE)
    BUNDLE_LIST_MAX_PAGES: int = Field(default=DEFAULT_BUNDLE_LIST_MAX_PAGES)

    @field_validator("SHOPIFY_MAX_CONCURRENT_REQUESTS")
    @classmethod
    def validate_max_concurrent_requests(cls, v):
        if v < 1:
            raise ValueError("SHOPIFY_MAX_CONCURRENT_REQUESTS must be at least 1")
        return v


class PollingSettings(BaseSettings):
    """Bundle operation polling settings"""

    BUNDLE_POLL_INTERVAL_SECONDS: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS)
    BUNDLE_POLL_MAX_ATTEMPTS: int = Field(default=DEFAULT_POLL_MAX_ATTEMPTS)
    BUNDLE_POLL_TIMEOUT_SECONDS: float = Field(default=DEFAULT_POLL_TIMEOUT_SECONDS)

    @field_validator("BUNDLE_POLL_MAX_ATTEMPTS")
    @classmethod
    def validate_max_attempts(cls, v):
        if v < 1:
            raise ValueError("BUNDLE_POLL_MAX_ATTEMPTS must be at least 1")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="console")

    LOGGING: dict = Field(
        default={
            "file": {
                "enabled": True,
                "log_dir": "logs",
                "max_file_size": 10485760,  # 10MB
                "backup_count": 5,
                "app_log_enabled": True,
                "error_log_enabled": True,
            },
            "console": {
                "enabled": True,
                "level": "INFO",
            },
        }
    )


class Settings(BaseSettings):
    """Main application settings"""

    model_config = SettingsConfigDict(
        env_file=[".env.local", ".env"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    # App Configuration
    PROJECT_NAME: str = PROJECT_NAME
    VERSION: str = VERSION
    DEBUG: bool = Field(default=False)
    PORT: int = Field(default=DEFAULT_PORT)
    ENVIRONMENT: str = Field(default=ENVIRONMENT_DEVELOPMENT)
    API_PREFIX: str = "/api"

    # Sub-settings
    database: DatabaseSettings = DatabaseSettings()
    shopify: ShopifySettings = ShopifySettings()
    polling: PollingSettings = PollingSettings()
    logging: LoggingSettings = LoggingSettings()

    # Retry Configuration for outbound Shopify calls
    MAX_RETRIES: int = Field(default=3)
    RETRY_DELAY: float = Field(default=0.5)

    HEALTH_CHECK_TIMEOUT: int = Field(default=HEALTH_CHECK_TIMEOUT)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(default=["*"])

    def validate_configuration(self) -> None:
        """Validate the complete configuration"""
        if self.polling.BUNDLE_POLL_TIMEOUT_SECONDS <= 0:
            raise ConfigurationError(
                "Bundle poll timeout must be positive",
                config_key="BUNDLE_POLL_TIMEOUT_SECONDS",
            )
        if self.MAX_RETRIES < 1:
            raise ConfigurationError(
                "MAX_RETRIES must be at least 1", config_key="MAX_RETRIES"
            )


# Create settings instance
settings = Settings()

# Validate configuration on import
settings.validate_configuration()
