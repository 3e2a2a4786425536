"""
Main logging module for Bundle Builder
"""

import logging
from typing import Dict, Optional

from .config import LoggingConfig
from .handlers import FileHandler, ConsoleHandler

# Global logger cache
_loggers: Dict[str, logging.Logger] = {}


class StructuredLogger:
    """Wrapper around standard Python logger that supports structured logging with keyword arguments"""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured data as key=value pairs"""
        structured_parts = []
        for key, value in kwargs.items():
            if value is None:
                continue
            if isinstance(value, str) and " " in value:
                structured_parts.append(f'{key}="{value}"')
            else:
                structured_parts.append(f"{key}={value}")

        if structured_parts:
            return f"{message} | {' | '.join(structured_parts)}"
        return message

    def _log(self, level: int, message: str, exc_info=False, **kwargs):
        if not self._logger.isEnabledFor(level):
            return
        fields = {k: v for k, v in kwargs.items() if v is not None}
        self._logger.log(
            level,
            self._format_message(message, **fields),
            exc_info=exc_info,
            extra={"extra_fields": fields, "base_message": message},
            stacklevel=3,
        )

    def debug(self, message: str, **kwargs):
        """Log debug message with structured data"""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with structured data"""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with structured data"""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with structured data"""
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with structured data"""
        self._log(logging.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log error message with the active exception's traceback"""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Setup logging configuration for the application"""
    if config is None:
        config = LoggingConfig()

    level = getattr(logging, config.level.upper())

    # Clear existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    if config.file.enabled:
        if config.file.app_log_enabled:
            root_logger.addHandler(
                FileHandler.create_app_handler(
                    log_dir=config.file.log_dir,
                    max_bytes=config.file.max_file_size,
                    backup_count=config.file.backup_count,
                    level=level,
                    formatter_type=config.format,
                )
            )

        if config.file.error_log_enabled:
            root_logger.addHandler(
                FileHandler.create_error_handler(
                    log_dir=config.file.log_dir,
                    max_bytes=config.file.max_file_size,
                    backup_count=config.file.backup_count,
                    formatter_type=config.format,
                )
            )

    if config.console.enabled:
        root_logger.addHandler(
            ConsoleHandler.create_handler(
                level=getattr(logging, config.console.level.upper()),
                formatter_type=config.format,
            )
        )

    # Quiet chatty libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.info("Logging system initialized")


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance"""
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return StructuredLogger(_loggers[name])
