from pathlib import Path

from chartgate.exceptions import (
    AuthenticationError,
    CacheError,
    ChartgateError,
    ConfigurationValidationError,
    DataProviderError,
    FileStorageError,
    InvalidCommandError,
    InvalidConfigurationError,
    NetworkError,
    NoDataError,
    ProviderError,
    RateLimitError,
    UnauthorizedError,
)
from chartgate.exceptions.base import ExceptionContext
from chartgate.exceptions.templates import ErrorCodes, RecoverySuggestions


class TestChartgateError:
    def test_basic_attributes(self):
        error = ChartgateError("boom")
        assert error.message == "boom"
        assert error.help_text is None
        assert len(error.correlation_id) == 8

    def test_context_is_copied(self):
        context = ExceptionContext(help_text="try again", error_code="X", context={"a": 1})
        error = ChartgateError("boom", context)
        error.add_context(b=2)
        assert context.context == {"a": 1}
        assert error.context == {"a": 1, "b": 2}

    def test_str_includes_help_and_error_id(self):
        error = ChartgateError("boom", ExceptionContext(help_text="try again", correlation_id="abcd1234"))
        text = str(error)
        assert text.startswith("boom")
        assert "Help: try again" in text
        assert "Error ID: abcd1234" in text

    def test_to_dict(self):
        data = ChartgateError("boom", ExceptionContext(error_code="E1")).to_dict()
        assert data["error_type"] == "ChartgateError"
        assert data["message"] == "boom"
        assert data["error_code"] == "E1"


class TestProviderErrors:
    def test_all_are_provider_errors(self):
        errors = [
            AuthenticationError("yahoo"),
            UnauthorizedError("yahoo", 401),
            RateLimitError("yahoo", 4),
            NetworkError("yahoo", "reset"),
            DataProviderError("yahoo", "No data found"),
            NoDataError("yahoo", "AAPL"),
        ]
        for error in errors:
            assert isinstance(error, ProviderError)
            assert error.provider == "yahoo"
            assert error.message.startswith("Provider yahoo: ")

    def test_authentication_error(self):
        error = AuthenticationError("yahoo", "crumb missing", http_code=403)
        assert error.message == "Provider yahoo: Authentication failed - crumb missing"
        assert error.details == "crumb missing"
        assert error.http_code == 403
        assert error.error_code == ErrorCodes.PROVIDER_AUTH_FAILED
        assert "auth clear" in error.user_action
        assert "403" in error.technical_details

    def test_rate_limit_error(self):
        error = RateLimitError("yahoo", attempts=4, wait_time=240)
        assert error.attempts == 4
        assert "after 4 attempts" in error.message
        assert "240 seconds" in error.help_text

    def test_network_error_with_status(self):
        error = NetworkError("yahoo", "Internal Server Error", status_code=500)
        assert error.message == "Provider yahoo: Request failed with status 500: Internal Server Error"
        assert error.context["status_code"] == 500

    def test_data_provider_error(self):
        error = DataProviderError("yahoo", "No data found, symbol may be delisted", "Not Found")
        assert error.upstream_message == "No data found, symbol may be delisted"
        assert "Upstream error: No data found" in error.message
        assert error.context["upstream_code"] == "Not Found"

    def test_no_data_error(self):
        assert NoDataError("yahoo", "AAPL").message == "Provider yahoo: No data returned from yahoo for AAPL"

    def test_recovery_suggestions(self):
        hints = RecoverySuggestions.for_auth_error("yahoo")
        assert len(hints) == 4
        assert "Chrome" in hints[0]


class TestStorageAndConfigErrors:
    def test_cache_error(self):
        error = CacheError("read", "/tmp/cache.json", "bad json")
        assert error.path == Path("/tmp/cache.json")
        assert error.message.endswith("- bad json")

    def test_file_storage_error(self):
        error = FileStorageError("write", "/tmp/out/a.csv", "denied")
        assert error.file_path == Path("/tmp/out/a.csv")
        assert "/tmp/out" in error.help_text

    def test_invalid_configuration_error(self):
        error = InvalidConfigurationError("fetch.max_retries", 99, "0..10")
        assert "fetch.max_retries" in error.message
        assert error.error_code == ErrorCodes.CONFIG_INVALID

    def test_validation_error_lists_errors(self):
        error = ConfigurationValidationError(["a: bad", "b: worse"])
        assert error.errors == ["a: bad", "b: worse"]
        assert "\n  - a: bad" in error.message

    def test_invalid_command_error(self):
        error = InvalidCommandError("download", "--start", "Start date must be before end date")
        assert error.message == "Invalid argument '--start': Start date must be before end date"
        assert "chartgate download --help" in error.help_text
