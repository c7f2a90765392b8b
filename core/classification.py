"""File classification and project type detection.

This module is the single place where the kit decides what a file or a source
tree is. Both the bulk reviewer and the doc generator call into it.

Files are classified by extension:
- `.tf`, `.tfvars` -> terraform
- `.py` -> python
- `.sh`, `.bash` -> shell
- `.yaml`, `.yml` -> kubernetes when the content mentions `apiVersion:` or
  `kind:`, plain yaml otherwise
- anything else -> other

Classification never fails a run: a YAML file that cannot be read is
reported and classified as other.

Project detection looks at marker files at the top of a source tree
(`main.tf`, `requirements.txt`, `setup.py`, `package.json`) before falling
back to scanning YAML files for Kubernetes manifests.
"""

import threading
from pathlib import Path

from constants import (
    EXTENSION_FILE_TYPES,
    KUBERNETES_MARKERS,
    NODEJS_MARKER_FILES,
    PYTHON_MARKER_FILES,
    YAML_EXTENSIONS,
)
from core.discovery import walk_files
from core.exceptions import FileReadError
from core.file_io import FileReader, FilesystemFileReader
from core.models import FileRecord
from models import DetectedProjectType, FileType
from utils import warn


def classify(file_path: Path, reader: FileReader | None = None) -> FileType:
    """
    Classify a file by extension, reading YAML files to spot manifests.

    Args:
        file_path: Path of the file to classify.
        reader: Reader used for YAML content. Defaults to FilesystemFileReader.

    Returns:
        The FileType of the file. Missing or unreadable YAML files are OTHER.
    """
    suffix = file_path.suffix.lower()

    if suffix in EXTENSION_FILE_TYPES:
        return EXTENSION_FILE_TYPES[suffix]

    if suffix not in YAML_EXTENSIONS:
        return FileType.OTHER

    if not file_path.is_file():
        warn(f"Cannot classify missing file: {file_path}")
        return FileType.OTHER

    reader = reader if reader is not None else FilesystemFileReader()
    try:
        content = reader.read_file(file_path)
    except FileReadError as e:
        warn(f"Cannot read {file_path}: {e.original_exception or e.message}")
        return FileType.OTHER

    if is_kubernetes_manifest(content):
        return FileType.KUBERNETES
    return FileType.YAML


def is_kubernetes_manifest(content: str) -> bool:
    return any(marker in content for marker in KUBERNETES_MARKERS)


def build_file_record(
    file_path: Path, reader: FileReader | None = None
) -> FileRecord | None:
    """
    Classify a file and measure it.

    Returns None, after a warning, when the file cannot be read; the caller
    skips it.
    """
    try:
        data = file_path.read_bytes()
    except OSError as e:
        warn(f"Skipping unreadable file {file_path}: {e.strerror or e}")
        return None

    return FileRecord(
        path=file_path,
        byte_size=len(data),
        line_count=data.count(b"\n"),
        file_type=classify(file_path, reader),
    )


def detect_project_type(
    source_dir: Path,
    reader: FileReader | None = None,
    cancel: threading.Event | None = None,
) -> DetectedProjectType:
    """
    Infer a coarse project type for a source tree.

    Checks are applied in priority order; the first match wins:
        1. `main.tf` at the top level -> terraform
        2. `requirements.txt` or `setup.py` at the top level -> python
        3. `package.json` at the top level -> nodejs
        4. any YAML file in the tree that classifies as kubernetes -> kubernetes
        5. otherwise -> generic

    Args:
        source_dir: Root of the tree to inspect.
        reader: Reader used for YAML content.
        cancel: Stops the YAML scan early when set.

    Returns:
        The DetectedProjectType.
    """
    if (source_dir / "main.tf").is_file():
        return DetectedProjectType.TERRAFORM

    if any((source_dir / marker).is_file() for marker in PYTHON_MARKER_FILES):
        return DetectedProjectType.PYTHON

    if any((source_dir / marker).is_file() for marker in NODEJS_MARKER_FILES):
        return DetectedProjectType.NODEJS

    for yaml_file in walk_files(source_dir, YAML_EXTENSIONS, cancel=cancel):
        if classify(yaml_file, reader) == FileType.KUBERNETES:
            return DetectedProjectType.KUBERNETES

    return DetectedProjectType.GENERIC
