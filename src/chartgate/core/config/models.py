"""
Configuration models for chartgate.

Pydantic models that validate the TOML configuration file and the
CHARTGATE_* environment overrides.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...models.fetch_request import Interval
from ..constants import (
    DEFAULT_BACKOFF_BASE_SECONDS,
    DEFAULT_IMPLICIT_WAIT_SECONDS,
    DEFAULT_INTERVAL,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_FILE_SIZE_BYTES,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PAGE_LOAD_TIMEOUT_SECONDS,
    DEFAULT_SESSION_VALIDITY_HOURS,
    DEFAULT_SETTLE_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_RETRIES_LIMIT,
    MAX_TIMEOUT_SECONDS,
    MIN_LOG_FILE_SIZE_BYTES,
)


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Logging level")
    format: str = Field("console", description="Log format: console, json, rich")
    output: List[str] = Field(["console"], description="Log outputs: console, file")
    file_path: Optional[Path] = Field(None, description="Log file path")
    max_file_size: int = Field(
        DEFAULT_LOG_FILE_SIZE_BYTES,
        ge=MIN_LOG_FILE_SIZE_BYTES,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        DEFAULT_LOG_BACKUP_COUNT,
        ge=1,
        le=20,
        description="Number of backup log files to keep",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ["console", "json", "rich"]:
            raise ValueError("format must be one of: console, json, rich")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: List[str]) -> List[str]:
        valid_outputs = {"console", "file"}
        for output in v:
            if output not in valid_outputs:
                raise ValueError(
                    f"output must contain only: {', '.join(sorted(valid_outputs))}"
                )
        return v


class GeneralConfig(BaseModel):
    """General application configuration."""

    output_directory: Path = Field(
        Path("."), description="Directory for exported CSV files"
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging configuration"
    )

    @field_validator("output_directory")
    @classmethod
    def validate_directory(cls, v: Path) -> Path:
        if isinstance(v, str):
            v = Path(v)
        return v.expanduser()


class AuthConfig(BaseModel):
    """Browser authentication and session cache configuration."""

    headless: bool = Field(True, description="Run the browser without a window")
    use_cache: bool = Field(True, description="Reuse a cached session between runs")
    cache_file: Optional[Path] = Field(
        None, description="Session cache file (default: project root)"
    )
    session_validity_hours: float = Field(
        DEFAULT_SESSION_VALIDITY_HOURS,
        gt=0,
        le=24 * 7,
        description="How long a fresh session is trusted",
    )
    page_load_timeout: int = Field(
        DEFAULT_PAGE_LOAD_TIMEOUT_SECONDS, ge=1, le=MAX_TIMEOUT_SECONDS
    )
    implicit_wait: int = Field(DEFAULT_IMPLICIT_WAIT_SECONDS, ge=0, le=MAX_TIMEOUT_SECONDS)
    settle_seconds: float = Field(
        DEFAULT_SETTLE_SECONDS, ge=0, description="Pause after each page load"
    )

    @field_validator("cache_file")
    @classmethod
    def expand_cache_file(cls, v: Optional[Path]) -> Optional[Path]:
        return v.expanduser() if v is not None else None


class FetchConfig(BaseModel):
    """Chart endpoint request configuration."""

    max_retries: int = Field(
        DEFAULT_MAX_RETRIES, ge=0, le=MAX_RETRIES_LIMIT,
        description="Rate-limit retries before giving up",
    )
    backoff_base_seconds: float = Field(
        DEFAULT_BACKOFF_BASE_SECONDS, gt=0,
        description="Backoff base; the n-th wait is base * 2**n",
    )
    request_timeout: int = Field(DEFAULT_TIMEOUT_SECONDS, ge=1, le=MAX_TIMEOUT_SECONDS)
    include_pre_post: bool = Field(False, description="Include pre/post market bars")
    default_interval: str = Field(DEFAULT_INTERVAL, description="Bar interval")

    @field_validator("default_interval")
    @classmethod
    def validate_interval(cls, v: str) -> str:
        return Interval.parse(v).value


class ChartgateConfig(BaseModel):
    """Main chartgate configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }


class ChartgateSettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    chartgate_log_level: Optional[str] = Field(None, alias="CHARTGATE_LOG_LEVEL")
    chartgate_log_format: Optional[str] = Field(None, alias="CHARTGATE_LOG_FORMAT")
    chartgate_output_directory: Optional[str] = Field(None, alias="CHARTGATE_OUTPUT_DIR")

    chartgate_headless: Optional[bool] = Field(None, alias="CHARTGATE_HEADLESS")
    chartgate_use_cache: Optional[bool] = Field(None, alias="CHARTGATE_USE_CACHE")
    chartgate_cache_file: Optional[str] = Field(None, alias="CHARTGATE_CACHE_FILE")
    chartgate_session_validity_hours: Optional[float] = Field(
        None, alias="CHARTGATE_SESSION_VALIDITY_HOURS"
    )

    chartgate_max_retries: Optional[int] = Field(None, alias="CHARTGATE_MAX_RETRIES")
    chartgate_backoff_base_seconds: Optional[float] = Field(
        None, alias="CHARTGATE_BACKOFF_BASE_SECONDS"
    )
    chartgate_request_timeout: Optional[int] = Field(None, alias="CHARTGATE_REQUEST_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
