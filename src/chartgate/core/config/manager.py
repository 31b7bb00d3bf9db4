"""
Configuration manager for chartgate.

Loads defaults, then the TOML file, then CHARTGATE_* environment overrides,
and validates the result into a ChartgateConfig.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w
from pydantic import ValidationError

from ...exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
)
from .models import ChartgateConfig, ChartgateSettings

logger = logging.getLogger(__name__)


@dataclass
class EnvironmentOverride:
    """Helper for applying environment variable overrides."""
    config_section: Dict[str, Any]
    settings: ChartgateSettings

    def apply_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply setting if it's set in environment."""
        value = getattr(self.settings, setting_name, None)
        if value is not None:
            self.config_section[config_key] = value

    def apply_string_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply string setting if it's set and non-empty."""
        value = getattr(self.settings, setting_name, None)
        if value:
            self.config_section[config_key] = value


class ConfigManager:
    """Loads, validates and persists the chartgate configuration."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to custom config file. If None, uses default location.
        """
        if config_file:
            self.config_file = Path(config_file)
        else:
            self.config_file = self._default_config_file()

        self._config: Optional[ChartgateConfig] = None

    @staticmethod
    def _default_config_file() -> Optional[Path]:
        try:
            config_dir = Path.home() / ".config" / "chartgate"
            config_dir.mkdir(parents=True, exist_ok=True)
            return config_dir / "config.toml"
        except (OSError, RuntimeError):
            # Home config not writable
            config_dir = Path.cwd() / ".chartgate"
            try:
                config_dir.mkdir(parents=True, exist_ok=True)
                return config_dir / "config.toml"
            except OSError:
                return None

    @property
    def config_directory(self) -> Path:
        """Get the configuration directory."""
        return self.config_file.parent if self.config_file else Path.cwd()

    def load_config(self) -> ChartgateConfig:
        """Load and validate configuration from file and environment."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        if self.config_file and self.config_file.exists():
            config_data = self._load_toml_file(self.config_file)

        config_data = self._apply_env_overrides(config_data)

        try:
            self._config = ChartgateConfig(**config_data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationValidationError(errors) from e
        except (ValueError, TypeError) as e:
            raise ConfigurationValidationError([f"Configuration validation failed: {e}"]) from e

        logger.debug(f"Configuration loaded (file: {self.config_file})")
        return self._config

    @staticmethod
    def _load_toml_file(path: Path) -> Dict[str, Any]:
        """Load configuration from TOML file."""
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(
                str(path), f"Invalid TOML syntax: {e}", "valid TOML format"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file: {path}",
                help_text="Check file permissions and path",
            ) from e

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        settings = ChartgateSettings()

        for section in ("general", "auth", "fetch"):
            config_data.setdefault(section, {})
        config_data["general"].setdefault("logging", {})

        general = EnvironmentOverride(config_data["general"], settings)
        general.apply_string_if_set("chartgate_output_directory", "output_directory")

        log = EnvironmentOverride(config_data["general"]["logging"], settings)
        log.apply_string_if_set("chartgate_log_level", "level")
        log.apply_string_if_set("chartgate_log_format", "format")

        auth = EnvironmentOverride(config_data["auth"], settings)
        auth.apply_if_set("chartgate_headless", "headless")
        auth.apply_if_set("chartgate_use_cache", "use_cache")
        auth.apply_string_if_set("chartgate_cache_file", "cache_file")
        auth.apply_if_set("chartgate_session_validity_hours", "session_validity_hours")

        fetch = EnvironmentOverride(config_data["fetch"], settings)
        fetch.apply_if_set("chartgate_max_retries", "max_retries")
        fetch.apply_if_set("chartgate_backoff_base_seconds", "backoff_base_seconds")
        fetch.apply_if_set("chartgate_request_timeout", "request_timeout")

        return config_data

    def _remove_none_values(self, data):
        """Recursively remove None values; TOML has no null."""
        if isinstance(data, dict):
            return {k: self._remove_none_values(v) for k, v in data.items() if v is not None}
        elif isinstance(data, list):
            return [self._remove_none_values(item) for item in data if item is not None]
        else:
            return data

    def _write_toml(self, config: ChartgateConfig, path: Path) -> None:
        config_dict = self._remove_none_values(config.model_dump(mode="json"))
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(path, "wb") as f:
                tomli_w.dump(config_dict, f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot write configuration file: {path}",
                help_text="Check file permissions and path",
            ) from e

    def save_config(self, config: Optional[ChartgateConfig] = None) -> None:
        """Save configuration to the TOML file."""
        if config is None:
            config = self.load_config()

        if self.config_file is None:
            logger.warning("No writable configuration location; configuration not saved")
            return

        self._write_toml(config, self.config_file)
        self._config = config

    def export_config(self, file_path: Path) -> None:
        """Export current configuration to a TOML file."""
        self._write_toml(self.load_config(), Path(file_path))

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._config = ChartgateConfig()
        self.save_config()
