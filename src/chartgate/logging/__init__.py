"""
chartgate logging package

- formatters: Log formatting (JSON, console, rich)
- loggers: Structured logger with correlation IDs
- performance: Operation timing
- config: Logging configuration
- manager: Centralized logging setup
"""

from .config import LoggingConfig
from .formatters import StructuredFormatter
from .loggers import ChartgateLogger
from .manager import LoggingManager, configure_logging, logging_manager
from .performance import TimedOperation

get_logger = logging_manager.get_logger

__all__ = [
    "LoggingConfig",
    "LoggingManager",
    "configure_logging",
    "ChartgateLogger",
    "get_logger",
    "TimedOperation",
    "StructuredFormatter",
]
