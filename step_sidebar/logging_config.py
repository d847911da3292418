"""Logging utilities for the step sidebar.

Records emitted while the controller handles an event carry the step, the
variant and the editing context they apply to. The JSON formatter lifts those
fields to the top level of each line so logs can be filtered per step.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping, Optional

__all__ = [
    "CONTEXT_FIELDS",
    "setup_logging",
    "JSONFormatter",
    "SidebarLogAdapter",
    "get_sidebar_logger",
    "get_log_level_from_env",
]

CONTEXT_FIELDS = ("step_id", "variant_id", "editing_context")

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with sidebar context fields at the top level.

    Example output:
        {"timestamp": "2025-01-15T10:30:00.123Z", "level": "INFO",
         "logger": "step_sidebar.deletion", "message": "Deleted step 'a1' at index 2",
         "step_id": "a1", "editing_context": "step"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class SidebarLogAdapter(logging.LoggerAdapter):
    """Adapter that stamps the bound sidebar context onto every record.

    Example:
        log = get_sidebar_logger("step_sidebar.controller")
        log.bind(step_id="a1", editing_context="variant")
        log.info("Opened conditions")
    """

    def __init__(self, logger: logging.Logger) -> None:
        super().__init__(logger, {})

    def bind(self, **fields: Any) -> None:
        """Replace the bound context; empty values are dropped."""
        self.extra = {k: v for k, v in fields.items() if v}

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        # Per-call extra= overrides the bound context
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_sidebar_logger(name: str) -> SidebarLogAdapter:
    """Get a context-carrying logger for a sidebar module."""
    return SidebarLogAdapter(logging.getLogger(name))


def get_log_level_from_env() -> int:
    """Get log level from environment variable.

    Checks SIDEBAR_LOG_LEVEL first, then LOG_LEVEL. Defaults to INFO.
    """
    level_name = os.environ.get("SIDEBAR_LOG_LEVEL") or os.environ.get("LOG_LEVEL", "INFO")
    return _LEVEL_MAP.get(level_name.upper(), logging.INFO)


def setup_logging(
    verbose: bool = False,
    json_format: bool = False,
    log_file: Optional[str] = None,
    level_name: Optional[str] = None,
) -> None:
    """Configure logging for the sidebar.

    Args:
        verbose: Enable debug-level logging (overrides every other level)
        json_format: Use JSON output format (for log aggregation)
        log_file: Optional file path to write logs to
        level_name: Level name such as "WARNING"; defaults to the environment
    """
    if verbose:
        level = logging.DEBUG
    elif level_name:
        level = _LEVEL_MAP.get(level_name.upper(), logging.INFO)
    else:
        level = get_log_level_from_env()

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
