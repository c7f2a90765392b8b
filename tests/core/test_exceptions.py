"""
Unit tests for custom exception classes.

This module tests the exception hierarchy: default messages, custom messages,
original exception chaining, and the extra attributes carried by specific
errors.
"""

from pathlib import Path

import pytest

from core.exceptions import (
    AlreadyExistsError,
    ConfigurationError,
    FileIOError,
    FileReadError,
    FileWriteError,
    InvalidFilePathError,
    KitError,
    NotFoundError,
    UnknownTypeError,
    UserAbort,
)


@pytest.mark.unit
class TestKitError:
    def test_default_message(self):
        exc = KitError()
        assert exc.message == "An error occurred"
        assert str(exc) == "An error occurred"
        assert exc.original_exception is None

    def test_custom_message_and_original(self):
        original = ValueError("bad value")
        exc = KitError("Something broke", original_exception=original)
        assert exc.message == "Something broke"
        assert exc.original_exception is original


@pytest.mark.unit
@pytest.mark.parametrize(
    "exc_class",
    [
        ConfigurationError,
        UnknownTypeError,
        NotFoundError,
        AlreadyExistsError,
        UserAbort,
        FileIOError,
        InvalidFilePathError,
        FileReadError,
        FileWriteError,
    ],
)
def test_hierarchy(exc_class):
    assert issubclass(exc_class, KitError)


@pytest.mark.unit
@pytest.mark.parametrize(
    "exc_class,expected",
    [
        (ConfigurationError, "A required argument is missing"),
        (UserAbort, "Aborted by user"),
        (FileIOError, "An error occurred during file I/O operation"),
        (InvalidFilePathError, "Invalid file path"),
        (FileReadError, "Failed to read file"),
        (FileWriteError, "Failed to write file"),
    ],
)
def test_default_messages(exc_class, expected):
    assert exc_class().message == expected


@pytest.mark.unit
class TestUnknownTypeError:
    def test_message_lists_choices(self):
        exc = UnknownTypeError("ansible", choices=["terraform", "python"], kind="project type")
        assert exc.message == "Unknown project type: ansible (available: terraform, python)"
        assert exc.value == "ansible"
        assert exc.choices == ("terraform", "python")

    def test_message_without_choices(self):
        assert UnknownTypeError("x").message == "Unknown type: x"


@pytest.mark.unit
class TestPathErrors:
    def test_not_found_default_message(self):
        exc = NotFoundError("templates/x/CLAUDE.md")
        assert exc.path == Path("templates/x/CLAUDE.md")
        assert exc.message == "Not found: templates/x/CLAUDE.md"

    def test_not_found_custom_message(self):
        assert NotFoundError("a", message="Template not found: a").message == "Template not found: a"

    def test_already_exists_mentions_force(self):
        exc = AlreadyExistsError(Path("proj"))
        assert exc.path == Path("proj")
        assert "--force" in exc.message


@pytest.mark.unit
class TestFileIOError:
    def test_file_path_and_original(self):
        original = PermissionError("denied")
        exc = FileWriteError(
            message="Failed to write to file: out.md",
            file_path="out.md",
            original_exception=original,
        )
        assert exc.file_path == "out.md"
        assert exc.original_exception is original
        assert isinstance(exc, FileIOError)

    def test_can_be_caught_as_kit_error(self):
        with pytest.raises(KitError):
            raise FileReadError(file_path="x")
