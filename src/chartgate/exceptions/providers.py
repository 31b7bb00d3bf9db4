"""
Data provider-related exceptions.

Everything the chart endpoint or the browser authentication flow can cause
ends up as exactly one of these at the fetch engine boundary.
"""

from typing import Optional

from .base import ChartgateError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates, RecoverySuggestions


class ProviderError(ChartgateError):
    """Base class for data provider-related errors."""

    def __init__(
        self,
        provider: str,
        message: str,
        help_text: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        self.provider = provider
        full_message = ErrorMessageTemplates.PROVIDER_ERROR.format(
            provider=provider, message=message
        )
        context = ExceptionContext(
            help_text=help_text, error_code=error_code, context={"provider": provider}
        )
        super().__init__(full_message, context)


class AuthenticationError(ProviderError):
    """Raised when a browser-derived session cannot be obtained or is rejected twice."""

    def __init__(self, provider: str, details: Optional[str] = None, http_code: Optional[int] = None):
        message = "Authentication failed"
        if details:
            message += f" - {details}"

        suggestions = RecoverySuggestions.for_auth_error(provider)
        super().__init__(
            provider, message, suggestions[0], ErrorCodes.PROVIDER_AUTH_FAILED
        )
        self.details = details
        self.http_code = http_code
        self.user_action = "Run: chartgate auth clear && chartgate auth login --no-headless"

        if http_code:
            self.context["http_code"] = http_code
        if http_code == 401:
            self.technical_details = "HTTP 401 Unauthorized - session rejected after re-authentication"
        elif http_code == 403:
            self.technical_details = "HTTP 403 Forbidden - session rejected after re-authentication"


class UnauthorizedError(ProviderError):
    """Raised when the endpoint rejects the active session (HTTP 401/403)."""

    def __init__(self, provider: str, http_code: int):
        self.http_code = http_code
        super().__init__(
            provider,
            f"Session rejected with HTTP {http_code}",
            help_text="The cached crumb or cookies are no longer accepted",
            error_code=ErrorCodes.PROVIDER_UNAUTHORIZED,
        )
        self.context["http_code"] = http_code


class RateLimitError(ProviderError):
    """Raised when the rate limit persists after the retry budget is spent."""

    def __init__(self, provider: str, attempts: Optional[int] = None, wait_time: Optional[float] = None):
        self.attempts = attempts
        message = "Rate limit exceeded"
        if attempts is not None:
            message += f" after {attempts} attempts"

        help_text = RecoverySuggestions.for_rate_limit(provider)[0]
        if wait_time:
            help_text += f" (last wait: {wait_time:.0f} seconds)"

        super().__init__(provider, message, help_text=help_text, error_code=ErrorCodes.PROVIDER_RATE_LIMITED)


class NetworkError(ProviderError):
    """Raised on a non-success status (other than 401/403/429) or a transport failure."""

    def __init__(self, provider: str, details: Optional[str] = None, status_code: Optional[int] = None):
        self.status_code = status_code
        message = "Request failed"
        if status_code is not None:
            message += f" with status {status_code}"
        if details:
            message += f": {details}"

        help_text = RecoverySuggestions.for_connection_error(provider)[0]
        super().__init__(provider, message, help_text=help_text, error_code=ErrorCodes.PROVIDER_CONNECTION_FAILED)
        if status_code is not None:
            self.context["status_code"] = status_code


class DataProviderError(ProviderError):
    """Raised when the endpoint answers with an explicit error payload."""

    def __init__(self, provider: str, upstream_message: str, upstream_code: Optional[str] = None):
        self.upstream_message = upstream_message
        self.upstream_code = upstream_code
        super().__init__(
            provider,
            f"Upstream error: {upstream_message}",
            help_text="Verify the ticker symbol, interval and date range",
            error_code=ErrorCodes.PROVIDER_ERROR_PAYLOAD,
        )
        if upstream_code:
            self.context["upstream_code"] = upstream_code


class NoDataError(ProviderError):
    """Raised when the endpoint returns an empty result set."""

    def __init__(self, provider: str, ticker: Optional[str] = None):
        self.ticker = ticker
        message = f"No data returned from {provider}"
        if ticker:
            message += f" for {ticker}"
        super().__init__(
            provider,
            message,
            help_text="Check that data exists for the requested date range and interval",
            error_code=ErrorCodes.PROVIDER_DATA_NOT_FOUND,
        )
