"""
chartgate Exception Hierarchy

Exception Hierarchy:
    ChartgateError (base)
    ├── ConfigurationError
    │   ├── InvalidConfigurationError
    │   └── ConfigurationValidationError
    ├── ProviderError
    │   ├── AuthenticationError
    │   ├── UnauthorizedError
    │   ├── RateLimitError
    │   ├── NetworkError
    │   ├── DataProviderError
    │   └── NoDataError
    ├── DataStorageError
    │   ├── CacheError
    │   └── FileStorageError
    └── CLIError
        └── InvalidCommandError
"""

from .base import ChartgateError, ExceptionContext

from .cli import CLIError, InvalidCommandError

from .config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
)

from .providers import (
    AuthenticationError,
    DataProviderError,
    NetworkError,
    NoDataError,
    ProviderError,
    RateLimitError,
    UnauthorizedError,
)

from .storage import CacheError, DataStorageError, FileStorageError

__all__ = [
    # Base
    "ChartgateError",
    "ExceptionContext",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "ConfigurationValidationError",
    # Providers
    "ProviderError",
    "AuthenticationError",
    "UnauthorizedError",
    "RateLimitError",
    "NetworkError",
    "DataProviderError",
    "NoDataError",
    # Storage
    "DataStorageError",
    "CacheError",
    "FileStorageError",
    # CLI
    "CLIError",
    "InvalidCommandError",
]
