"""
Logging formatters for Bundle Builder
"""

import json
import logging
from datetime import datetime
from typing import Optional


class StructuredFormatter(logging.Formatter):
    """Single-line JSON with call-site details, for log shipping"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        fields = getattr(record, "extra_fields", None)
        if fields:
            log_entry["fields"] = fields

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class JSONFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": getattr(record, "base_message", record.getMessage()),
        }

        # Structured fields are flattened into the top level
        fields = getattr(record, "extra_fields", None)
        if fields:
            for key, value in fields.items():
                log_entry.setdefault(key, value)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable console formatter with colors"""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{timestamp}] {record.levelname:8s} {record.name}: {record.getMessage()}"

        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            line = f"{color}{line}{self.COLORS['RESET']}"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


class SimpleFormatter(logging.Formatter):
    """Plain formatter for files and environments without a TTY"""

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        super().__init__(
            fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt or "%Y-%m-%d %H:%M:%S",
        )


def build_formatter(formatter_type: str, for_file: bool = False) -> logging.Formatter:
    """Return the formatter registered under formatter_type"""
    if formatter_type == "json":
        return JSONFormatter()
    if formatter_type == "structured":
        return StructuredFormatter()
    if formatter_type == "console":
        # No ANSI escapes in files
        return ConsoleFormatter(use_colors=not for_file)
    return SimpleFormatter()
