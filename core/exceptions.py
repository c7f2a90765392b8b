"""
Custom exception classes for the Claude DevOps Kit CLI.

This module defines application-specific exceptions that are raised while
scaffolding projects, enumerating files for review and generating
documentation. Every exception carries a human-readable message and, where
relevant, the underlying exception that caused it, so the CLI layer can print
a friendly report instead of a raw stack trace.
"""

from pathlib import Path
from typing import Iterable, Optional


class KitError(Exception):
    """
    Base exception for all errors raised by the kit.

    All subclasses are terminal for the current invocation; none of them are
    retried.

    Attributes:
        message: A human-readable error message describing what went wrong.
        original_exception: The underlying exception that caused this error, if any.
    """

    default_message = "An error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.original_exception = original_exception


class ConfigurationError(KitError):
    """Raised when a required argument is missing or empty."""

    default_message = "A required argument is missing"


class UnknownTypeError(KitError):
    """
    Raised when a project type, doc type or type filter is not recognized.

    Attributes:
        value: The rejected value.
        choices: The accepted values, for display.
    """

    def __init__(
        self,
        value: str,
        choices: Iterable[str] = (),
        kind: str = "type",
    ):
        self.value = value
        self.choices = tuple(str(c) for c in choices)
        message = f"Unknown {kind}: {value}"
        if self.choices:
            message += f" (available: {', '.join(self.choices)})"
        super().__init__(message=message)


class NotFoundError(KitError):
    """
    Raised when a required directory, template or prompt file is missing.

    Attributes:
        path: The path that could not be found.
    """

    def __init__(self, path: Path | str, message: Optional[str] = None):
        self.path = Path(path)
        super().__init__(message=message or f"Not found: {path}")


class AlreadyExistsError(KitError):
    """
    Raised when the target project directory already exists and neither
    `force` nor an interactive confirmation allowed proceeding.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(
            message=f"Directory already exists: {path} (use --force to continue)"
        )


class UserAbort(KitError):
    """Raised when the user declines an overwrite confirmation."""

    default_message = "Aborted by user"


class FileIOError(KitError):
    """
    Base exception for file I/O errors.

    Attributes:
        file_path: The path of the file involved in the failed operation, if known.
    """

    default_message = "An error occurred during file I/O operation"

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message=message, original_exception=original_exception)
        self.file_path = file_path


class InvalidFilePathError(FileIOError):
    """Raised when a file path is unset or its parent directory is unusable."""

    default_message = "Invalid file path"


class FileReadError(FileIOError):
    """Raised when reading an existing file fails."""

    default_message = "Failed to read file"


class FileWriteError(FileIOError):
    """Raised when writing, copying or creating a file or directory fails."""

    default_message = "Failed to write file"
