"""
Text file access for manifests, prompts, reports and doc skeletons.

Reading is used to sniff YAML files for Kubernetes markers, to pick Terraform
block lines out of `.tf` files and to load prompt documents. Writing is used
for the review report and the generated docs. Both sides are protocols so
core code can be exercised with the in-memory doubles at the bottom of this
module.
"""

import os
from pathlib import Path
from typing import Callable, Protocol

from core.exceptions import FileReadError, FileWriteError, InvalidFilePathError

# Bytes inspected when deciding whether a file is binary.
BINARY_SNIFF_BYTES = 1024


class FileReader(Protocol):
    """Source of text content, keyed by path."""

    def read_file(self, file_path: Path) -> str:
        """
        Return the text of `file_path`.

        Missing and binary files read as "" so callers can treat them like
        files without markers.
        """


class FileWriter(Protocol):
    """Destination for one generated markdown document."""

    def write_file(self, data: str) -> None:
        """Replace the destination contents with `data`."""


class FilesystemFileReader:

    def read_file(self, file_path: Path) -> str:
        """
        Read a manifest, Terraform file or prompt as UTF-8.

        Undecodable bytes are dropped. A file whose first bytes contain a NUL is
        treated as binary and reads as "".

        Raises:
            FileReadError: If the file exists but cannot be read.
        """
        if not file_path.is_file() or self._looks_binary(file_path):
            return ""

        try:
            with file_path.open("r", encoding="utf-8", errors="ignore") as f:
                return f.read()
        except OSError as e:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=e,
            ) from e

    @staticmethod
    def _looks_binary(file_path: Path) -> bool:
        try:
            with open(file_path, "rb") as f:
                return b"\0" in f.read(BINARY_SNIFF_BYTES)
        except OSError:
            return True


class FilesystemFileWriter:
    """
    Writes a generated document to a fixed path.

    Build instances with `from_path`, which checks the destination directory
    before any content is rendered to it.
    """

    def __init__(self, file_path: Path | None = None):
        self.file_path = file_path

    @classmethod
    def from_path(cls, file_path: Path) -> "FilesystemFileWriter":
        """
        Raises:
            InvalidFilePathError: If the parent directory is missing or not
                writable. The report and docs commands never create it here.
        """
        parent = file_path.parent
        if not parent.exists():
            raise InvalidFilePathError(
                message=f"Parent directory does not exist: {parent}",
                file_path=str(file_path),
            )
        if not os.access(parent, os.W_OK):
            raise InvalidFilePathError(
                message=f"Parent directory is not writable: {parent}",
                file_path=str(file_path),
            )
        return cls(file_path)

    def write_file(self, data: str) -> None:
        """
        Truncate the destination and write `data` to it.

        Raises:
            InvalidFilePathError: If no destination was configured.
            FileWriteError: If the destination cannot be opened or written.
        """
        if self.file_path is None:
            raise InvalidFilePathError("No file path set. Use a factory method first.")

        try:
            with open(self.file_path, "w", encoding="utf-8") as f:
                f.write(data)
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to write to file: {self.file_path}",
                file_path=str(self.file_path),
                original_exception=e,
            ) from e


class MockFileReader:
    """
    In-memory FileReader for tests.

    `return_value` answers every read; otherwise `read_file_fn` is called with
    the path and may raise to simulate an unreadable manifest. Every requested
    path is recorded in `read_file_calls`.
    """

    def __init__(
        self,
        return_value: str | None = None,
        read_file_fn: Callable[[Path], str] | None = None,
    ):
        self.return_value = return_value
        self.read_file_fn = read_file_fn
        self.read_file_calls: list[Path] = []

    def read_file(self, file_path: Path) -> str:
        self.read_file_calls.append(file_path)
        if self.return_value is not None:
            return self.return_value
        if self.read_file_fn is not None:
            return self.read_file_fn(file_path)
        return ""


class MockFileWriter:
    """
    In-memory FileWriter for tests.

    Records the data of every call. With `store_written_data`, also keeps the
    last document written in `written_data`.
    """

    def __init__(self, store_written_data: bool = False):
        self.store_written_data = store_written_data
        self.write_file_calls: list[str] = []
        self.written_data: str = ""

    def write_file(self, data: str) -> None:
        self.write_file_calls.append(data)
        if self.store_written_data:
            self.written_data = data
