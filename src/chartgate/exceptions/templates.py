"""
Standardized error message templates and recovery suggestions.

Keeps the wording of provider, cache and CLI errors consistent so users get
clear, actionable output regardless of where the failure surfaced.
"""

from typing import List


class ErrorMessageTemplates:
    """Standardized error message templates for consistent formatting."""

    PROVIDER_ERROR = "Provider {provider}: {message}"

    CONFIG_INVALID = "Invalid configuration for '{field}': got {value}, expected {expected}"

    CACHE_ERROR = "Credential cache {operation} failed: {path}"
    STORAGE_ERROR = "File {operation} failed: {path}"

    INVALID_ARGUMENT = "Invalid argument '{argument}': {reason}"


class RecoverySuggestions:
    """Standard recovery suggestions for common error scenarios."""

    @staticmethod
    def for_auth_error(provider: str) -> List[str]:
        """Get recovery suggestions for authentication errors."""
        return [
            "Ensure the Chrome browser is installed",
            "ChromeDriver is downloaded automatically on first use",
            "Check your internet connection",
            f"Wait a few minutes and try again ({provider} may be blocking automated sessions)",
        ]

    @staticmethod
    def for_rate_limit(provider: str) -> List[str]:
        """Get recovery suggestions for rate limiting."""
        return [
            "Please wait a few minutes and try again",
            f"Reduce the number of requests sent to {provider}",
        ]

    @staticmethod
    def for_connection_error(provider: str) -> List[str]:
        """Get recovery suggestions for connection errors."""
        return [
            "Check your internet connection",
            f"Verify {provider} service is accessible",
            "Check firewall and proxy settings",
        ]


class ErrorCodes:
    """Standardized error codes for consistent error categorization."""

    # Configuration errors (CONFIG_xxx)
    CONFIG_INVALID = "CONFIG_002"
    CONFIG_VALIDATION_ERROR = "CONFIG_004"

    # Provider errors (PROVIDER_xxx)
    PROVIDER_AUTH_FAILED = "PROVIDER_001"
    PROVIDER_CONNECTION_FAILED = "PROVIDER_002"
    PROVIDER_RATE_LIMITED = "PROVIDER_003"
    PROVIDER_DATA_NOT_FOUND = "PROVIDER_004"
    PROVIDER_UNAUTHORIZED = "PROVIDER_006"
    PROVIDER_ERROR_PAYLOAD = "PROVIDER_007"

    # Storage errors (STORAGE_xxx)
    STORAGE_IO_ERROR = "STORAGE_004"
    STORAGE_CACHE_ERROR = "STORAGE_005"

    # CLI errors (CLI_xxx)
    CLI_INVALID_ARGUMENT = "CLI_001"
