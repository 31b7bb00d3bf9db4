"""
CLI-related exceptions.
"""

from .base import ChartgateError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates


class CLIError(ChartgateError):
    """Base class for CLI-related errors."""


class InvalidCommandError(CLIError):
    """Raised when CLI command usage is invalid."""

    def __init__(self, command: str, argument: str, reason: str):
        self.command = command
        self.argument = argument
        message = ErrorMessageTemplates.INVALID_ARGUMENT.format(argument=argument, reason=reason)
        context = ExceptionContext(
            help_text=f"Use 'chartgate {command} --help' for correct usage",
            error_code=ErrorCodes.CLI_INVALID_ARGUMENT,
        )
        super().__init__(message, context)
