"""
Core data models for scaffolding, review and documentation runs.

Every value here lives for a single invocation: it is built from CLI
arguments or from the file system, consumed, and discarded.
"""

from dataclasses import dataclass, field
from pathlib import Path

from core.file_io import FileWriter
from models import DetectedProjectType, FileType, ProjectType


@dataclass(frozen=True)
class FileRecord:
    """
    A file found during enumeration, with the facts shown in a report.

    Attributes:
        path: The path as discovered (relative or absolute, as the caller gave it).
        byte_size: Size of the file in bytes.
        line_count: Number of newline characters, as `wc -l` counts them.
        file_type: The classified FileType.
    """

    path: Path
    byte_size: int
    line_count: int
    file_type: FileType


@dataclass(frozen=True)
class ScaffoldPlan:
    """
    Everything the scaffolder needs, resolved and validated up front.

    Attributes:
        project_type: The canonical project type, or None when only an explicit
            template was supplied with no recognized type.
        project_name: Name of the new project (also its directory name).
        target_directory: Directory the project directory is created in.
        template_path: Resolved template copied to `<project>/CLAUDE.md`.
        config_directory: Example `.claude` configuration subtree to copy, if any.
        force: Proceed even if the project directory already exists.
    """

    project_type: ProjectType | None
    project_name: str
    target_directory: Path
    template_path: Path
    config_directory: Path | None = None
    force: bool = False

    @property
    def project_dir(self) -> Path:
        return self.target_directory / self.project_name


@dataclass
class ScaffoldResult:
    project_dir: Path
    created: list[Path] = field(default_factory=list)
    git_initialized: bool = False


@dataclass(frozen=True)
class ProjectInfo:
    """Name and detected type of a source tree being documented."""

    name: str
    source_dir: Path
    project_type: DetectedProjectType


class ReportDocument:
    """
    An ordered list of markdown sections, written once.

    Sections are joined verbatim; each one is responsible for its own blank
    lines. Writing always truncates the destination.
    """

    def __init__(self) -> None:
        self.sections: list[str] = []

    def add(self, section: str) -> None:
        self.sections.append(section)

    def render(self) -> str:
        return "".join(self.sections)

    def write(self, writer: FileWriter) -> None:
        writer.write_file(self.render())
