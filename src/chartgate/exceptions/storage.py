"""
Data storage-related exceptions.

Covers the credential cache and CSV export.
"""

from pathlib import Path
from typing import Optional, Union

from .base import ChartgateError, ExceptionContext
from .templates import ErrorCodes, ErrorMessageTemplates


class DataStorageError(ChartgateError):
    """Base class for data storage-related errors."""


class CacheError(DataStorageError):
    """Raised internally when the credential cache cannot be read or written.

    Never surfaced to callers: the credential store logs it as a warning and
    degrades to a cache miss.
    """

    def __init__(self, operation: str, path: Union[str, Path], details: Optional[str] = None):
        self.operation = operation
        self.path = Path(path)

        message = ErrorMessageTemplates.CACHE_ERROR.format(operation=operation, path=self.path)
        if details:
            message += f" - {details}"

        context = ExceptionContext(
            help_text="The next run will re-authenticate through the browser",
            error_code=ErrorCodes.STORAGE_CACHE_ERROR,
        )
        super().__init__(message, context)


class FileStorageError(DataStorageError):
    """Raised when writing exported price data fails."""

    def __init__(self, operation: str, file_path: Union[str, Path], details: Optional[str] = None):
        self.operation = operation
        self.file_path = Path(file_path)

        message = ErrorMessageTemplates.STORAGE_ERROR.format(operation=operation, path=self.file_path)
        if details:
            message += f" - {details}"

        help_text = (
            f"Check file permissions and available disk space for {self.file_path.parent}"
        )
        context = ExceptionContext(help_text=help_text, error_code=ErrorCodes.STORAGE_IO_ERROR)
        super().__init__(message, context)
