"""
Enhanced logger classes with correlation IDs and structured context.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional
from uuid import uuid4


class ChartgateLogger:
    """Logger wrapper that attaches a correlation ID and structured context to every record."""

    def __init__(self, name: str, correlation_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id or str(uuid4())
        self.extra_context = {}

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs):
        extra: Dict[str, Any] = {"correlation_id": self.correlation_id}
        context = self.extra_context.copy()
        context.update(kwargs)
        if context:
            extra["extra_context"] = context
        self.logger.log(level, msg, extra=extra, exc_info=exc_info)

    def debug(self, msg: str, **kwargs):
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log(logging.ERROR, msg, **kwargs)

    def exception(self, msg: str, **kwargs):
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)

    def critical(self, msg: str, **kwargs):
        self._log(logging.CRITICAL, msg, **kwargs)

    def add_context(self, **kwargs):
        """Add persistent context to this logger."""
        self.extra_context.update(kwargs)

    def with_context(self, **kwargs) -> "ChartgateLogger":
        """Create a copy of this logger with additional context."""
        new_logger = ChartgateLogger(self.logger.name, self.correlation_id)
        new_logger.extra_context = self.extra_context.copy()
        new_logger.extra_context.update(kwargs)
        return new_logger

    @contextmanager
    def temp_context(self, **kwargs):
        """Context manager for temporary context (keyword arguments)."""
        original_context = self.extra_context.copy()
        self.extra_context.update(kwargs)
        try:
            yield self
        finally:
            self.extra_context = original_context


def get_logger(name: str, correlation_id: Optional[str] = None) -> ChartgateLogger:
    """Get a ChartgateLogger instance."""
    return ChartgateLogger(name, correlation_id)
