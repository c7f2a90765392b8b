"""Documentation skeleton generation.

Writes API.md, ARCHITECTURE.md and README.md skeletons for a source tree.
Each skeleton starts with a header naming the project, the generation time,
the detected project type and the source directory, followed by placeholder
sections tailored to that type. API.md also lists the tree's Python modules
or Terraform files; for Terraform, the `resource`, `module` and `data` lines
of each file are copied in.

Source files are listed in sorted order, so two runs over the same tree
differ only in their `**Generated:**` line.

With `--format html` every markdown file in the output directory is also
rendered to HTML with pandoc. A missing pandoc is a warning.
"""

import subprocess
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from adapters.pandoc import PandocConverter
from constants import DOCS_STYLESHEET, TERRAFORM_BLOCK_PREFIXES, TIMESTAMP_FORMAT
from core.classification import detect_project_type
from core.config import KitPaths
from core.discovery import walk_files
from core.exceptions import FileReadError, FileWriteError, NotFoundError, UnknownTypeError
from core.file_io import FileReader, FilesystemFileReader, FilesystemFileWriter
from core.models import ProjectInfo, ReportDocument
from models import DetectedProjectType, DocType, OutputFormat
from ui.progress import NoOpProgressDisplay, ProgressDisplay
from utils import info, warn

DOC_FILE_NAMES: dict[DocType, str] = {
    DocType.API: "API.md",
    DocType.ARCHITECTURE: "ARCHITECTURE.md",
    DocType.README: "README.md",
}


@dataclass
class DocOptions:
    source_dir: Path = Path(".")
    output_dir: Path = Path("./docs")
    doc_types: list[DocType] = field(default_factory=lambda: list(DocType))
    output_format: OutputFormat = OutputFormat.MARKDOWN
    project_name: str | None = None


def parse_doc_types(value: str) -> list[DocType]:
    """
    Expand a `--type` value into doc types. "all" yields every type in
    API, architecture, README order.

    Raises:
        UnknownTypeError: If the value is not a doc type or "all".
    """
    normalized = value.strip().lower()
    if normalized == "all":
        return list(DocType)
    try:
        return [DocType(normalized)]
    except ValueError:
        raise UnknownTypeError(
            value, choices=[*DocType, "all"], kind="documentation type"
        ) from None


def parse_output_format(value: str) -> OutputFormat:
    try:
        return OutputFormat(value.strip().lower())
    except ValueError:
        raise UnknownTypeError(value, choices=list(OutputFormat), kind="format") from None


def _header_lines(project: ProjectInfo, generated: str) -> str:
    return (
        f"**Project:** {project.name}\n\n"
        f"**Generated:** {generated}\n"
        f"**Project Type:** {project.project_type}\n"
        f"**Source Directory:** {project.source_dir}\n\n"
        "---\n\n"
    )


def terraform_blocks(content: str) -> list[str]:
    """Lines that open a resource, module or data block."""
    return [
        line for line in content.splitlines() if line.startswith(TERRAFORM_BLOCK_PREFIXES)
    ]


def render_api(
    project: ProjectInfo,
    generated: str,
    reader: FileReader,
    progress_display: ProgressDisplay,
    cancel: threading.Event | None = None,
) -> ReportDocument:
    doc = ReportDocument()
    doc.add("# API Documentation\n\n")
    doc.add(_header_lines(project, generated))
    doc.add(
        "## Overview\n\n"
        "This document describes the API and interfaces provided by this project.\n\n"
        "## Modules/Components\n\n"
    )

    if project.project_type == DetectedProjectType.PYTHON:
        files = list(
            walk_files(project.source_dir, {".py"}, exclude_dirs={"__pycache__"}, cancel=cancel)
        )
    elif project.project_type == DetectedProjectType.TERRAFORM:
        files = list(walk_files(project.source_dir, {".tf"}, cancel=cancel))
    else:
        files = []
        doc.add(
            "### Components\n\n"
            "_Use Claude Code to analyze code structure and generate API documentation_\n"
        )

    with progress_display as rpd:
        rpd.on_start(f"Documenting {len(files)} source files...", total=len(files))
        for file_path in files:
            rpd.on_update(advance=1)
            if project.project_type == DetectedProjectType.PYTHON:
                doc.add(
                    f"### {file_path.stem}\n\n"
                    f"**File:** `{file_path}`\n\n"
                    "**Description:**\n"
                    "_Extract from docstrings using Claude Code_\n\n"
                    "**Functions/Classes:**\n"
                    "- _List functions and classes using Claude Code_\n\n"
                )
                continue

            try:
                blocks = terraform_blocks(reader.read_file(file_path))
            except FileReadError as e:
                warn(f"Cannot read {file_path}: {e.original_exception or e.message}")
                blocks = []
            listing = "".join(f"- {line}\n" for line in blocks) or "- _No resources found_\n"
            doc.add(
                f"### {file_path.parent.name or project.name}\n\n"
                f"**File:** `{file_path}`\n\n"
                "**Resources:**\n"
                f"{listing}\n"
            )
        rpd.on_complete(f"Documented {len(files)} source files.")

    doc.add(
        "\n---\n\n"
        "## Usage Examples\n\n"
        "_Add usage examples for each module/component_\n\n"
        "## Reference\n\n"
        "_Detailed API reference generated using Claude Code_\n"
    )
    return doc


TERRAFORM_COMPONENTS = """
### Infrastructure Components

_Use Claude Code to analyze Terraform files and document:_

- VPC and networking setup
- Compute resources
- Storage resources
- Security configurations
- Monitoring and logging

### Resource Dependencies

```
_Generate dependency graph using Claude Code_
```

"""

KUBERNETES_COMPONENTS = """
### Kubernetes Resources

_Use Claude Code to analyze manifests and document:_

- Namespaces and organization
- Deployments and workloads
- Services and networking
- ConfigMaps and Secrets
- Persistent volumes
- Network policies

### Deployment Architecture

```
_Generate deployment diagram using Claude Code_
```

"""

GENERIC_COMPONENTS = """
### System Components

_Use Claude Code to analyze codebase and document system architecture_

"""


def render_architecture(project: ProjectInfo, generated: str) -> ReportDocument:
    doc = ReportDocument()
    doc.add("# Architecture Documentation\n\n")
    doc.add(_header_lines(project, generated))
    doc.add(
        "## Overview\n\n"
        "This document describes the architecture and design of this project.\n\n"
        "## System Architecture\n\n"
        "```\n"
        "_Generate architecture diagram using Claude Code based on infrastructure code_\n"
        "```\n\n"
        "## Components\n"
    )

    if project.project_type == DetectedProjectType.TERRAFORM:
        doc.add(TERRAFORM_COMPONENTS)
    elif project.project_type == DetectedProjectType.KUBERNETES:
        doc.add(KUBERNETES_COMPONENTS)
    else:
        doc.add(GENERIC_COMPONENTS)

    doc.add(
        "\n## Data Flow\n\n"
        "_Describe data flow through the system_\n\n"
        "## Security Architecture\n\n"
        "_Document security measures and controls_\n\n"
        "## Scalability and Performance\n\n"
        "_Discuss scalability considerations and performance characteristics_\n\n"
        "## Deployment\n\n"
        "_Describe deployment process and architecture_\n\n"
        "---\n\n"
        "## Diagrams\n\n"
        "_Generate diagrams using Claude Code:_\n"
        "- System architecture diagram\n"
        "- Component interaction diagram\n"
        "- Data flow diagram\n"
        "- Deployment diagram\n"
    )
    return doc


README_BODY = """## Description

_Use Claude Code to generate project description based on code analysis_

## Features

_List key features extracted using Claude Code_

## Requirements

_List requirements and dependencies_

## Installation

```bash
# Installation instructions generated using Claude Code
```

## Usage

```bash
# Usage examples generated using Claude Code
```

## Configuration

_Configuration options and examples_

## Development

_Development setup and guidelines_

## Testing

_Testing instructions_

## Deployment

_Deployment instructions_

## Architecture

See [ARCHITECTURE.md](./ARCHITECTURE.md) for detailed architecture documentation.

## API Reference

See [API.md](./API.md) for API documentation.

## Contributing

_Contributing guidelines_

## License

_License information_

## Authors

_Author information_

---

**Note:** This README was generated using Claude Code. Review and customize as needed.
"""


def render_readme(project: ProjectInfo, generated: str) -> ReportDocument:
    doc = ReportDocument()
    doc.add(
        f"# {project.name}\n\n"
        f"**Generated:** {generated}\n"
        f"**Project Type:** {project.project_type}\n\n"
    )
    doc.add(README_BODY)
    return doc


def convert_to_html(
    markdown_files: list[Path], converter: PandocConverter
) -> list[Path]:
    """
    Render each markdown file to a sibling `.html` file.

    Returns the HTML files written. Skips everything, with a warning, when
    pandoc is not installed; a single failed conversion is also a warning.
    """
    if not converter.is_available():
        warn("pandoc not found. HTML conversion skipped.")
        info("Install pandoc for HTML output: https://pandoc.org/installing.html")
        return []

    info("Converting markdown to HTML...")
    written = []
    for md_file in markdown_files:
        html_file = md_file.with_suffix(".html")
        try:
            converter.convert(md_file, html_file)
        except (subprocess.CalledProcessError, OSError) as e:
            warn(f"Failed to convert {md_file}: {e}")
            continue
        written.append(html_file)
    return written


def generate_docs(
    options: DocOptions,
    paths: KitPaths,
    reader: FileReader | None = None,
    converter: PandocConverter | None = None,
    progress_display: ProgressDisplay | None = None,
    cancel: threading.Event | None = None,
    now: datetime | None = None,
) -> list[Path]:
    """
    Generate the requested documentation skeletons.

    Args:
        options: Source and output directories, doc types, format and name.
        paths: Kit locations, used for the HTML stylesheet.
        reader: Reader for Terraform and YAML content.
        converter: HTML converter. Defaults to pandoc with the kit stylesheet.
        progress_display: Progress reporting while listing source files.
        cancel: Cancellation event for directory walks.
        now: Generation timestamp. Defaults to the current time.

    Returns:
        The paths written: markdown files in doc-type order, then any HTML files.

    Raises:
        NotFoundError: If the source directory does not exist.
        FileWriteError: If the output directory cannot be created.
        InvalidFilePathError, FileWriteError: If a document cannot be written.
    """
    if not options.source_dir.is_dir():
        raise NotFoundError(
            options.source_dir, message=f"Source directory not found: {options.source_dir}"
        )

    try:
        options.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileWriteError(
            message=f"Failed to create output directory: {options.output_dir}",
            file_path=str(options.output_dir),
            original_exception=e,
        ) from e
    info(f"Output directory: {options.output_dir}")

    reader = reader if reader is not None else FilesystemFileReader()
    project = ProjectInfo(
        name=options.project_name or options.source_dir.resolve().name,
        source_dir=options.source_dir,
        project_type=detect_project_type(options.source_dir, reader, cancel),
    )
    info(f"Project: {project.name}")
    info(f"Project type: {project.project_type}")

    generated = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    written: list[Path] = []
    for doc_type in options.doc_types:
        info(f"Generating {doc_type} documentation...")
        if doc_type == DocType.API:
            doc = render_api(
                project,
                generated,
                reader,
                progress_display if progress_display is not None else NoOpProgressDisplay(),
                cancel,
            )
        elif doc_type == DocType.ARCHITECTURE:
            doc = render_architecture(project, generated)
        else:
            doc = render_readme(project, generated)

        output_file = options.output_dir / DOC_FILE_NAMES[doc_type]
        doc.write(FilesystemFileWriter.from_path(output_file))
        info(f"Documentation generated: {output_file}")
        written.append(output_file)

    if options.output_format == OutputFormat.HTML:
        if converter is None:
            converter = PandocConverter(stylesheet=paths.docs_dir / DOCS_STYLESHEET)
        markdown_files = sorted(options.output_dir.glob("*.md"))
        written.extend(convert_to_html(markdown_files, converter))

    info("Documentation generation complete!")
    return written
