"""
Centralized error handling for the CLI.

Every chartgate error is printed with its help text and error ID and the
process exits with status 1.
"""

import functools
import logging
import sys

from rich.console import Console
from rich.markup import escape

from ..exceptions import (
    AuthenticationError,
    ChartgateError,
    CLIError,
    ConfigurationError,
    DataProviderError,
    DataStorageError,
    NetworkError,
    NoDataError,
    RateLimitError,
)
from ..exceptions.templates import RecoverySuggestions
from ..logging_integration import get_logger

console = Console(stderr=True)

EXIT_FAILURE = 1


def handle_cli_errors(func):
    """Decorator to handle all CLI errors with proper formatting and exit codes."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            _print_error("\nOperation cancelled by user", "yellow")
            sys.exit(EXIT_FAILURE)
        except RateLimitError as e:
            _handle_rate_limit_error(e)
        except AuthenticationError as e:
            _handle_authentication_error(e)
        except ConfigurationError as e:
            _handle_error("Configuration Error", e)
        except NetworkError as e:
            _handle_error("Connection Error", e)
        except NoDataError as e:
            _handle_error("No Data", e, style="yellow")
        except DataProviderError as e:
            _handle_error("Provider Error", e)
        except DataStorageError as e:
            _handle_error("Storage Error", e)
        except CLIError as e:
            _handle_error("Invalid Usage", e)
        except ChartgateError as e:
            _handle_error("Error", e)
    return wrapper


def _print_error(message: str, style: str = "red"):
    console.print(f"[{style}]{escape(message)}[/{style}]")


def _print_help(message: str):
    console.print(f"[blue]Help: {escape(message)}[/blue]")


def _print_action(message: str):
    console.print(f"[green]Action: {escape(message)}[/green]")


def _print_error_id(error_id: str):
    console.print(f"[dim]Error ID: {escape(error_id)}[/dim]")


def _log_error(e: ChartgateError):
    logger = get_logger("chartgate.cli.error", e.correlation_id)
    logger.error(f"{e.__class__.__name__}: {e.message}", error_code=e.error_code)


def _handle_rate_limit_error(e: RateLimitError):
    _print_error(f"ERROR: {e.message}")
    _print_help("Please wait a few minutes and try again.")
    _print_error_id(e.correlation_id)
    _log_error(e)
    sys.exit(EXIT_FAILURE)


def _handle_authentication_error(e: AuthenticationError):
    _print_error(f"Authentication Failed: {e.message}")
    console.print("[yellow]Troubleshooting:[/yellow]")
    for i, hint in enumerate(RecoverySuggestions.for_auth_error(e.provider), start=1):
        console.print(f"  {i}. {escape(hint)}")
    if e.user_action:
        _print_action(e.user_action)
    if e.technical_details:
        console.print(f"[dim]Details: {escape(e.technical_details)}[/dim]")
    _print_error_id(e.correlation_id)
    _log_error(e)
    sys.exit(EXIT_FAILURE)


def _handle_error(title: str, e: ChartgateError, style: str = "red"):
    _print_error(f"{title}: {e.message}", style)
    if e.help_text:
        _print_help(e.help_text)
    if e.user_action:
        _print_action(e.user_action)
    cause = e.__cause__
    if cause is not None:
        console.print(f"[dim]Details: {escape(str(cause))}[/dim]")
    _print_error_id(e.correlation_id)
    _log_error(e)
    sys.exit(EXIT_FAILURE)
