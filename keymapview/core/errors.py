"""Exception hierarchy for keymapview."""

from pathlib import Path
from typing import Any


class KeymapViewError(Exception):
    """Base error for all keymapview failures.

    Carries an optional context dictionary so callers and log records can
    report what was being attempted without parsing the message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class KeymapError(KeymapViewError):
    """Raised when keymap text cannot be turned into a model."""


class ConfigError(KeymapViewError):
    """Raised for invalid or unreadable configuration."""


class FileSystemError(KeymapViewError):
    """Raised when a file operation fails.

    Attributes:
        path: Path the operation was applied to
        operation: Name of the failed operation (e.g. ``read_text``)
    """

    def __init__(
        self,
        message: str,
        path: Path,
        operation: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context)
        self.path = path
        self.operation = operation

    @property
    def is_not_found(self) -> bool:
        """Whether the failure was caused by a missing file."""
        return isinstance(self.__cause__, FileNotFoundError)


def create_file_error(
    path: Path,
    operation: str,
    error: Exception,
    context: dict[str, Any] | None = None,
) -> FileSystemError:
    """Build a FileSystemError describing a failed file operation.

    Args:
        path: Path the operation was applied to
        operation: Name of the failed operation
        error: Underlying exception
        context: Extra details to attach

    Returns:
        FileSystemError ready to be raised ``from error``
    """
    if isinstance(error, FileNotFoundError):
        message = f"File not found: {path}"
    elif isinstance(error, PermissionError):
        message = f"Permission denied: {path}"
    elif isinstance(error, UnicodeDecodeError):
        message = f"Could not decode {path}: {error.reason}"
    else:
        message = f"Failed to {operation.replace('_', ' ')} {path}: {error}"

    return FileSystemError(
        message,
        path=path,
        operation=operation,
        context={"error_type": type(error).__name__, **(context or {})},
    )
