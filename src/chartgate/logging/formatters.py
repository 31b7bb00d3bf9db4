"""
Log formatters: one JSON line per record, a plain console layout, or rich.

Crumbs and cookie values reach the logs only as structured context; the JSON
formatter masks any context key that names one.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler

from ..utils.utils import mask_secret

SECRET_KEYS = ("crumb", "cookie", "cookies")
CONSOLE_FORMAT = "%(asctime)s [%(levelname)8s] %(name)s: %(message)s"


def _masked(context: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: mask_secret(str(value)) if key.lower() in SECRET_KEYS and value is not None else value
        for key, value in context.items()
    }


class StructuredFormatter(logging.Formatter):
    """Formats records as JSON, flattening the ChartgateLogger context into the entry."""

    def __init__(self, service_name: str = "chartgate", version: str = "unknown"):
        super().__init__()
        self.service_name = service_name
        self.version = version

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "version": self.version,
        }

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            entry["correlation_id"] = correlation_id

        context = getattr(record, "extra_context", None)
        if context:
            # Fixed fields win over context keys of the same name
            for key, value in _masked(context).items():
                entry.setdefault(key, value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def create_console_formatter() -> logging.Formatter:
    return logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def create_rich_handler() -> logging.Handler:
    return RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
