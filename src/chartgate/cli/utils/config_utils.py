"""
Configuration helpers shared across CLI commands.

Kept apart from the command modules to avoid circular imports between them.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Tuple

import click

from ...core.config import ChartgateConfig, ConfigManager
from ...core.constants import CACHE_FILE_NAME, DEFAULT_LOOKBACK_DAYS
from ...infrastructure.providers.yahoo import YahooFinanceClient
from ...utils.utils import find_project_root

logger = logging.getLogger(__name__)


def get_or_create_config_manager(config_file: Optional[Path] = None) -> ConfigManager:
    return ConfigManager(config_file)


def get_config(ctx: click.Context) -> ChartgateConfig:
    """The configuration for this invocation, loaded once per context."""
    obj = ctx.ensure_object(dict)
    if obj.get("config") is None:
        manager = obj.get("config_manager") or get_or_create_config_manager(obj.get("config_file"))
        obj["config_manager"] = manager
        obj["config"] = manager.load_config()
    return obj["config"]


def resolve_cache_path(config: ChartgateConfig, start: Optional[Path] = None) -> Path:
    """Configured cache file, or the cache file name in the project root."""
    if config.auth.cache_file is not None:
        return config.auth.cache_file
    return find_project_root(start) / CACHE_FILE_NAME


def get_default_date_range(today: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    end = (today or datetime.now()).replace(hour=0, minute=0, second=0, microsecond=0)
    return end - timedelta(days=DEFAULT_LOOKBACK_DAYS), end


def default_output_path(ticker: str, start: datetime, end: datetime, output_directory: Path) -> Path:
    return output_directory / f"{ticker}_{start:%Y%m%d}_{end:%Y%m%d}.csv"


def ensure_csv_suffix(path: Path) -> Path:
    if path.suffix.lower() != ".csv":
        return path.with_name(path.name + ".csv")
    return path


def create_client(config: ChartgateConfig, cache_path: Optional[Path]) -> YahooFinanceClient:
    return YahooFinanceClient.from_config(config, cache_path)
