"""
Configuration-related exceptions.

All exceptions related to configuration parsing, validation, and management.
"""

from typing import Any, List, Optional

from .base import ChartgateError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates


class ConfigurationError(ChartgateError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, help_text: Optional[str] = None):
        super().__init__(message, ExceptionContext(help_text=help_text))


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration contains invalid values."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = ErrorMessageTemplates.CONFIG_INVALID.format(
            field=field, value=repr(value), expected=expected
        )
        super().__init__(
            message,
            help_text=f"Please check the configuration for '{field}' and ensure it matches: {expected}",
        )
        self.error_code = ErrorCodes.CONFIG_INVALID
        self.user_action = "Run 'chartgate config show' to review the active configuration"


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = "Configuration validation failed:"
        for error in errors:
            message += f"\n  - {error}"

        super().__init__(
            message,
            help_text="Please check your configuration file and fix the validation errors listed above",
        )
        self.error_code = ErrorCodes.CONFIG_VALIDATION_ERROR
