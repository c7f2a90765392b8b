"""Bulk review report generation.

Collects a set of files (an explicit list, or a filtered walk of a directory),
classifies each one with the shared classifier, and writes a markdown report
skeleton with one section per file for a human or AI reviewer to fill in.

The report is assembled in this order:
1. Header (timestamp, directory, file count, prompt file, type filter)
2. Summary and the list of reviewed files
3. The prompt template, embedded verbatim
4. One subsection per file, in discovery order
5. Next steps and notes

When no file matches, nothing is written.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from rich.table import Table

from constants import (
    DEFAULT_PROMPT_FILE,
    DEFAULT_REVIEW_OUTPUT,
    FALLBACK_PROMPT,
    REVIEW_TYPE_FILTERS,
    REVIEWABLE_EXTENSIONS,
    TIMESTAMP_FORMAT,
)
from core.classification import build_file_record
from core.config import KitPaths
from core.discovery import walk_files
from core.exceptions import NotFoundError, UnknownTypeError
from core.file_io import FileReader, FilesystemFileReader, FilesystemFileWriter, FileWriter
from core.models import FileRecord, ReportDocument
from models import FileType
from ui.progress import NoOpProgressDisplay, ProgressDisplay
from utils import console, debug, info, warn


@dataclass
class ReviewOptions:
    """
    Arguments of a bulk review run.

    Attributes:
        target_dir: Directory to walk, and fallback base for explicit files.
        files: Explicit files to review, in order. When non-empty, the directory
            is not walked and no type filter applies.
        prompt_file: Prompt embedded in the report. None uses the default prompt
            shipped in the kit's prompts directory.
        output_file: Report destination, overwritten if present.
        type_filter: "all" or a FileType value.
        exclude: Literal substring; matching paths are dropped in directory mode.
    """

    target_dir: Path = Path(".")
    files: list[str] = field(default_factory=list)
    prompt_file: Path | None = None
    output_file: Path = Path(DEFAULT_REVIEW_OUTPUT)
    type_filter: str = "all"
    exclude: str = ""


def parse_file_list(value: str | None) -> list[str]:
    """Split a comma-separated file list, trimming whitespace around entries."""
    if not value:
        return []
    return [entry.strip() for entry in value.split(",") if entry.strip()]


def validate_type_filter(type_filter: str) -> str:
    normalized = type_filter.strip().lower()
    if normalized not in REVIEW_TYPE_FILTERS:
        raise UnknownTypeError(type_filter, choices=REVIEW_TYPE_FILTERS, kind="file type")
    return normalized


def resolve_explicit_files(entries: list[str], target_dir: Path) -> list[Path]:
    """
    Resolve each entry as given, then relative to `target_dir`.

    Entries that match neither are reported and skipped. Order is preserved.
    """
    resolved: list[Path] = []
    for entry in entries:
        as_given = Path(entry)
        in_target = target_dir / entry
        if as_given.is_file():
            resolved.append(as_given)
        elif in_target.is_file():
            resolved.append(in_target)
        else:
            warn(f"File not found: {entry}")
    return resolved


def collect_candidates(
    options: ReviewOptions, cancel: threading.Event | None = None
) -> list[Path]:
    """Return the paths to review before classification-based filtering."""
    if options.files:
        return resolve_explicit_files(options.files, options.target_dir)

    candidates = []
    for file_path in walk_files(options.target_dir, REVIEWABLE_EXTENSIONS, cancel=cancel):
        if options.exclude and options.exclude in str(file_path):
            debug("Excluded", file_path)
            continue
        candidates.append(file_path)
    return candidates


def discover_review_files(
    options: ReviewOptions,
    reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
    cancel: threading.Event | None = None,
) -> list[FileRecord]:
    """
    Find, classify and measure the files to review.

    Args:
        options: The run options. `type_filter` must already be validated.
        reader: Reader used to sniff YAML content.
        progress_display: Progress reporting; defaults to no output.
        cancel: When set, stops before the next file. Files classified so far
            are kept.

    Returns:
        FileRecords in discovery order. Unreadable files are skipped.
    """
    candidates = collect_candidates(options, cancel)
    apply_filter = not options.files and options.type_filter != "all"

    records: list[FileRecord] = []
    rpd = progress_display if progress_display is not None else NoOpProgressDisplay()
    with rpd:
        rpd.on_start(f"Classifying {len(candidates)} files...", total=len(candidates))
        for file_path in candidates:
            if cancel is not None and cancel.is_set():
                warn("Cancelled: remaining files were not classified")
                break
            rpd.on_update(advance=1)
            record = build_file_record(file_path, reader)
            if record is None:
                continue
            if apply_filter and record.file_type != options.type_filter:
                continue
            records.append(record)
        rpd.on_complete(f"Found {len(records)} matching files.")

    return records


def count_by_type(records: list[FileRecord]) -> dict[str, int]:
    """Per-type counts shown before the report is written."""
    counts = {"total": len(records), "terraform": 0, "kubernetes": 0, "python": 0, "other": 0}
    for record in records:
        if record.file_type in (FileType.TERRAFORM, FileType.KUBERNETES, FileType.PYTHON):
            counts[record.file_type] += 1
        else:
            counts["other"] += 1
    return counts


def print_statistics(counts: dict[str, int]) -> None:
    table = Table(title="Review Statistics", show_header=False)
    table.add_column("Kind")
    table.add_column("Files", justify="right")
    table.add_row("Total files", str(counts["total"]))
    table.add_row("Terraform files", str(counts["terraform"]))
    table.add_row("Kubernetes files", str(counts["kubernetes"]))
    table.add_row("Python files", str(counts["python"]))
    table.add_row("Other files", str(counts["other"]))
    console.print()
    console.print(table)
    console.print()


def load_prompt(prompt_file: Path, reader: FileReader | None = None) -> str:
    """Read the prompt file, falling back to a short default when it is missing."""
    if not prompt_file.is_file():
        warn(f"Prompt file not found: {prompt_file}")
        return FALLBACK_PROMPT

    reader = reader if reader is not None else FilesystemFileReader()
    info(f"Using prompt file: {prompt_file}")
    return reader.read_file(prompt_file)


def build_report(
    records: list[FileRecord],
    options: ReviewOptions,
    prompt_file: Path,
    prompt_content: str,
    generated_at: datetime,
) -> ReportDocument:
    """Assemble the report sections for the given records, in order."""
    doc = ReportDocument()
    total = len(records)

    doc.add(
        "# Bulk Review Report\n\n"
        f"**Generated:** {generated_at.strftime(TIMESTAMP_FORMAT)}\n"
        f"**Directory:** {options.target_dir}\n"
        f"**Files Reviewed:** {total}\n"
        f"**Prompt File:** {prompt_file}\n"
        f"**File Type Filter:** {options.type_filter}\n\n"
        "---\n\n"
        "## Summary\n\n"
        f"This report contains a review of {total} file(s) using the specified prompt template.\n\n"
        "## Files Reviewed\n\n"
    )
    doc.add("".join(f"- `{record.path}`\n" for record in records))
    doc.add(
        "\n---\n\n"
        "## Review Template\n\n"
        f"```\n{prompt_content.rstrip(chr(10))}\n```\n\n"
        "---\n\n"
        "## File-by-File Review\n\n"
    )

    for number, record in enumerate(records, start=1):
        doc.add(
            f"\n### File {number}: `{record.path}`\n\n"
            f"**File Type:** {record.file_type}\n"
            f"**Size:** {record.byte_size} bytes\n"
            f"**Lines:** {record.line_count}\n\n"
            "**Review Notes:**\n"
            "- [ ] Security review completed\n"
            "- [ ] Best practices checked\n"
            "- [ ] Configuration validated\n\n"
            "**Issues Found:**\n"
            "- _Review this file using Claude Code with the prompt template above_\n\n"
            "**Recommendations:**\n"
            "- _Add recommendations after review_\n\n"
            "---\n\n"
        )

    doc.add(
        "\n## Next Steps\n\n"
        "1. Review each file using Claude Code with the provided prompt template\n"
        '2. Update the "Issues Found" and "Recommendations" sections for each file\n'
        "3. Prioritize fixes based on severity\n"
        "4. Track remediation progress\n\n"
        "## Notes\n\n"
        "This is a template report. Actual review should be performed using Claude Code\n"
        "with the specified prompt file. Replace placeholder content with actual review\n"
        "findings.\n"
    )
    return doc


def run_bulk_review(
    options: ReviewOptions,
    paths: KitPaths,
    reader: FileReader | None = None,
    writer: FileWriter | None = None,
    progress_display: ProgressDisplay | None = None,
    cancel: threading.Event | None = None,
    now: datetime | None = None,
) -> ReportDocument | None:
    """
    Run a complete bulk review and write the report.

    Args:
        options: The run options.
        paths: Kit locations, used for the default prompt file.
        reader: Reader for YAML sniffing and the prompt file.
        writer: Destination writer. Defaults to a FilesystemFileWriter for
            `options.output_file`.
        progress_display: Progress reporting during classification.
        cancel: Cancellation event for the directory walk.
        now: Timestamp printed in the header. Defaults to the current time.

    Returns:
        The written ReportDocument, or None when no file matched.

    Raises:
        NotFoundError: If the target directory does not exist.
        UnknownTypeError: If the type filter is not recognized.
        InvalidFilePathError, FileWriteError: If the report cannot be written.
    """
    if not options.target_dir.is_dir():
        raise NotFoundError(
            options.target_dir, message=f"Directory not found: {options.target_dir}"
        )
    options.type_filter = validate_type_filter(options.type_filter)

    info("Starting bulk review...")
    info(f"Target directory: {options.target_dir}")
    info(f"File type filter: {options.type_filter}")
    info(f"Output file: {options.output_file}")

    records = discover_review_files(options, reader, progress_display, cancel)
    if not records:
        warn("No files found matching criteria")
        return None

    print_statistics(count_by_type(records))

    prompt_file = options.prompt_file or paths.prompts_dir / DEFAULT_PROMPT_FILE
    info("Generating review report...")
    doc = build_report(
        records,
        options,
        prompt_file,
        load_prompt(prompt_file, reader),
        now or datetime.now(),
    )

    if writer is None:
        writer = FilesystemFileWriter.from_path(options.output_file)
    doc.write(writer)

    info("Bulk review complete!")
    info(f"Review report saved to: {options.output_file}")
    return doc
