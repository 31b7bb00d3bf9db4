"""
Configuration management for chartgate.

Usage:
    from chartgate.core.config import ConfigManager

    config = ConfigManager().load_config()
    config.auth.session_validity_hours
"""

from .manager import ConfigManager
from .models import (
    AuthConfig,
    ChartgateConfig,
    ChartgateSettings,
    FetchConfig,
    GeneralConfig,
    LoggingSettings,
    LogLevel,
)

__all__ = [
    "ConfigManager",
    "ChartgateConfig",
    "ChartgateSettings",
    "GeneralConfig",
    "AuthConfig",
    "FetchConfig",
    "LoggingSettings",
    "LogLevel",
]
