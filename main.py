#!/usr/bin/env python3
"""
Main entry point for Bundle Builder
"""

import uvicorn

from bundle_builder.core.config import settings
from bundle_builder.core.logging.config import LoggingConfig
from bundle_builder.core.logging.logger import setup_logging

if __name__ == "__main__":
    setup_logging(LoggingConfig.from_settings(settings.logging))

    uvicorn.run(
        "bundle_builder.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info" if not settings.DEBUG else "debug",
        log_config=None,  # Keep our logging configuration
    )
