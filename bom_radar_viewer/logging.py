"""
Logging setup for the radar viewer API.

Console output for local runs, JSON lines for anything that ships logs
somewhere else.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER = "bom_radar_viewer"

# Extra fields copied onto JSON log entries when a call site supplies them
EXTRA_FIELDS = ("product_id", "geohash", "status", "url", "cache")


class StructuredFormatter(logging.Formatter):
    """One JSON object per log record.

    Always carries ``timestamp``, ``level``, ``logger`` and ``message``;
    request context passed through ``extra=`` (product id, geohash,
    upstream status) is added when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


class ConsoleFormatter(logging.Formatter):
    """``[HH:MM:SS] LEVEL message`` for humans watching a terminal."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S")
        line = f"[{timestamp}] {record.levelname:<7} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure the ``bom_radar_viewer`` logger tree.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Emit JSON lines instead of console text
        log_file: Optional path that receives the same records

    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)
    logger.propagate = False

    formatter = StructuredFormatter() if structured else ConsoleFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(numeric_level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric_level)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Named logger under the package root, e.g. ``bom_radar_viewer.scraper``."""
    return logging.getLogger(name)


def configure_from_env() -> logging.Logger:
    """Configure logging from BOM_LOG_LEVEL, BOM_LOG_FORMAT and BOM_LOG_FILE."""
    return setup_logging(
        level=os.environ.get("BOM_LOG_LEVEL", "INFO"),
        structured=os.environ.get("BOM_LOG_FORMAT", "console") == "json",
        log_file=os.environ.get("BOM_LOG_FILE"),
    )
