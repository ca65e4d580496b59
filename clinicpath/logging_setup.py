"""Structured JSON logging for the wayfinding API.

Purpose:
- Emit one JSON object per log line on stderr.
- Carry route context attached by the route service through `extra=`.

Usage example:
    >>> from clinicpath.logging_setup import configure_logging
    >>> configure_logging("DEBUG")
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from clinicpath.config import settings

# Attributes that `RouteService` passes via `extra=` and that are copied into
# the JSON payload when present on a record.
ROUTE_LOG_FIELDS = ("floor_id", "from_id", "to_id", "status", "source", "path_length")


class RouteJsonFormatter(logging.Formatter):
    """Format records as JSON, including any route context fields."""

    def __init__(self, extra_fields: tuple[str, ...] = ROUTE_LOG_FIELDS) -> None:
        super().__init__()
        self.extra_fields = extra_fields

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {key: getattr(record, key) for key in self.extra_fields if getattr(record, key, None) is not None}
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(level: str | None = None) -> logging.Handler:
    """Install a single JSON stream handler on the root logger.

    Args:
        level: Log level name. Defaults to `settings.log_level`; unknown names
            fall back to INFO.

    Returns:
        The installed handler. Calling again swaps it rather than stacking
        duplicate output.
    """
    name = (level or settings.log_level).upper()
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, name, logging.INFO))

    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, RouteJsonFormatter):
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.setFormatter(RouteJsonFormatter())
    root_logger.addHandler(handler)
    return handler
