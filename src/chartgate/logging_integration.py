"""
Integration between the chartgate configuration and logging.

Configures the logging package from a ChartgateConfig and hands out loggers
that fall back to a default console setup when nothing was configured.
"""

from typing import Optional

from .core.config import ChartgateConfig
from .logging import (
    ChartgateLogger,
    LoggingConfig as LogConfig,
    configure_logging,
    get_logger as _get_logger,
)

# Global state
_logging_configured = False
_current_config: Optional[ChartgateConfig] = None


def configure_logging_from_config(config: ChartgateConfig, service_name: str = "chartgate",
                                  version: str = "unknown", level_override: Optional[str] = None):
    """Configure logging system from chartgate configuration."""
    global _logging_configured, _current_config

    logging_config = config.general.logging

    log_config = LogConfig(
        level=level_override or logging_config.level.value,
        format_type=logging_config.format,
        output=logging_config.output,
        file_path=logging_config.file_path,
        max_file_size=logging_config.max_file_size,
        backup_count=logging_config.backup_count,
        service_name=service_name,
        version=version,
    )

    configure_logging(log_config)
    _logging_configured = True
    _current_config = config


def ensure_logging_configured():
    """Ensure logging is configured with defaults if not already done."""
    global _logging_configured

    if not _logging_configured:
        default_config = LogConfig(
            level="INFO",
            format_type="console",
            output=["console"],
            service_name="chartgate",
        )
        configure_logging(default_config)
        _logging_configured = True


def get_logger(name: str, correlation_id: Optional[str] = None) -> ChartgateLogger:
    """Get a chartgate logger instance, ensuring logging is configured."""
    ensure_logging_configured()
    return _get_logger(name, correlation_id)
