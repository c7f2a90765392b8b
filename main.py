"""
Claude DevOps Kit CLI Entry Point.

This module implements the command-line interface for the kit. It exposes
three independent commands, each installed as its own console script and
also available as a sub-command of the umbrella `claude-kit` app:

1.  **setup-claude-project** (`claude-kit setup`): creates a new project
    directory from a `CLAUDE.md` template and lays down the skeleton for
    Terraform, Kubernetes, Python or CI/CD projects.
2.  **bulk-review** (`claude-kit review`): classifies the Terraform,
    Kubernetes, Python and shell files of a directory (or an explicit list)
    and writes a markdown review report skeleton with one section per file.
3.  **generate-docs** (`claude-kit docs`): detects the type of a source tree
    and writes API, architecture and README documentation skeletons,
    optionally rendered to HTML with pandoc.

Usage:
    $ setup-claude-project terraform my-infra -d ./projects
    $ bulk-review -d ./infrastructure -t terraform -o review.md
    $ generate-docs -d ./terraform -t architecture

Dependencies:
    - Typer: CLI argument parsing and app structure.
    - Rich: Terminal UI, colors, and progress visualization.
    - Inquirer: Interactive prompts for `setup-claude-project --interactive`.
    - git, pandoc: Optional external tools, skipped with a warning when absent.
"""

import signal
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Generator

import typer
from rich import print as pr

from constants import DEFAULT_DOCS_OUTPUT, DEFAULT_REVIEW_OUTPUT
from core.config import KitPaths
from core.docs import DocOptions, generate_docs, parse_doc_types, parse_output_format
from core.exceptions import FileIOError, KitError
from core.review import ReviewOptions, parse_file_list, run_bulk_review
from core.scaffolding import scaffold
from models import ProjectType
from ui.progress import RichProgressDisplay
from ui.prompts import ask_project_name, confirm_overwrite, select_project_type
from utils import error, info, set_verbose

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

app = typer.Typer(
    help="Claude Code DevOps kit: project setup, bulk review and doc skeletons.",
    context_settings=CONTEXT_SETTINGS,
    no_args_is_help=True,
)
scaffold_app = typer.Typer(context_settings=CONTEXT_SETTINGS)
review_app = typer.Typer(context_settings=CONTEXT_SETTINGS)
docs_app = typer.Typer(context_settings=CONTEXT_SETTINGS)

RepoRootOption = Annotated[
    Path | None,
    typer.Option(
        "--repo-root",
        help="Directory holding templates/, configs/ and prompts/ (default: the kit's own).",
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Print debug messages.")
]


def setup_project(
    project_type: Annotated[
        str | None,
        typer.Argument(
            help=f"Type of project: {', '.join(ProjectType)} (aliases: k8s, ci-cd)",
            show_default=False,
        ),
    ] = None,
    project_name: Annotated[
        str | None,
        typer.Argument(help="Name of the project", show_default=False),
    ] = None,
    directory: Annotated[
        Path,
        typer.Option("--directory", "-d", help="Target directory for the project"),
    ] = Path("."),
    template: Annotated[
        str | None,
        typer.Option(
            "--template", "-t", help="Use a specific template file (overrides project type)"
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Continue if the project directory already exists"),
    ] = False,
    interactive: Annotated[
        bool,
        typer.Option(
            "--interactive",
            "-i",
            help="Prompt for a missing type or name, and before reusing a directory",
        ),
    ] = False,
    repo_root: RepoRootOption = None,
    verbose: VerboseOption = False,
):
    """
    Initialize a new project with Claude Code configuration.

    Copies the project type's CLAUDE.md template into DIRECTORY/PROJECT_NAME,
    adds the example .claude configuration and a type-specific skeleton,
    writes a default .gitignore and runs `git init` when git is installed.

    Examples:

        setup-claude-project terraform my-infra

        setup-claude-project kubernetes my-app -d ./projects

        setup-claude-project python my-tool --template custom-template.md
    """
    set_verbose(verbose)
    paths = _kit_paths(repo_root)

    with reporting_errors():
        if interactive and not project_type and not template:
            project_type = select_project_type()
        if interactive and not project_name:
            project_name = ask_project_name()

        result = scaffold(
            paths,
            project_type,
            project_name or "",
            target_dir=directory,
            explicit_template=template,
            force=force,
            confirm=confirm_overwrite if interactive else None,
        )

    info("Next steps:")
    info("  1. Review and customize CLAUDE.md")
    info("  2. Update project-specific configuration")
    info("  3. Start using Claude Code with your project")
    pr()
    info(f"Project location: {result.project_dir}")


def bulk_review(
    directory: Annotated[
        Path,
        typer.Option("--directory", "-d", help="Directory to review"),
    ] = Path("."),
    files: Annotated[
        str | None,
        typer.Option("--files", "-f", help="Comma-separated list of files to review"),
    ] = None,
    prompt: Annotated[
        Path | None,
        typer.Option(
            "--prompt", "-p", help="Prompt file to use (default: prompts/security-review.md)"
        ),
    ] = None,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file for the review report"),
    ] = Path(DEFAULT_REVIEW_OUTPUT),
    file_type: Annotated[
        str,
        typer.Option(
            "--type",
            "-t",
            help="File type filter: terraform, kubernetes, python, yaml, shell, all",
        ),
    ] = "all",
    exclude: Annotated[
        str,
        typer.Option("--exclude", "-e", help="Skip files whose path contains this text"),
    ] = "",
    repo_root: RepoRootOption = None,
    verbose: VerboseOption = False,
):
    """
    Generate a review report skeleton for multiple files.

    Note: this writes a template report; the actual review is done with
    Claude Code using the embedded prompt.

    Examples:

        bulk-review -d ./infrastructure -t terraform

        bulk-review -f main.tf,variables.tf -p prompts/debugging.md

        bulk-review -d ./k8s -t kubernetes -e .bak
    """
    set_verbose(verbose)
    paths = _kit_paths(repo_root)
    options = ReviewOptions(
        target_dir=directory,
        files=parse_file_list(files),
        prompt_file=prompt,
        output_file=output,
        type_filter=file_type,
        exclude=exclude,
    )

    with reporting_errors(), cancel_on_interrupt() as cancel:
        run_bulk_review(
            options,
            paths,
            progress_display=RichProgressDisplay(),
            cancel=cancel,
        )


def generate_documentation(
    directory: Annotated[
        Path,
        typer.Option("--directory", "-d", help="Source directory to document"),
    ] = Path("."),
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output directory for generated docs"),
    ] = Path(DEFAULT_DOCS_OUTPUT),
    doc_type: Annotated[
        str,
        typer.Option("--type", "-t", help="Documentation type: api, architecture, readme, all"),
    ] = "all",
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: markdown, html"),
    ] = "markdown",
    project: Annotated[
        str | None,
        typer.Option("--project", "-p", help="Project name (default: source directory name)"),
    ] = None,
    repo_root: RepoRootOption = None,
    verbose: VerboseOption = False,
):
    """
    Generate documentation skeletons from a source tree.

    Examples:

        generate-docs -d ./src -o ./docs -t api -p "My Project"

        generate-docs -d . -t readme -p "Infrastructure Project"

        generate-docs -d ./terraform -t architecture -f html
    """
    set_verbose(verbose)
    paths = _kit_paths(repo_root)

    with reporting_errors(), cancel_on_interrupt() as cancel:
        options = DocOptions(
            source_dir=directory,
            output_dir=output,
            doc_types=parse_doc_types(doc_type),
            output_format=parse_output_format(output_format),
            project_name=project,
        )
        generate_docs(
            options,
            paths,
            progress_display=RichProgressDisplay(),
            cancel=cancel,
        )

    info("")
    info("Next steps:")
    info("  1. Review generated documentation")
    info("  2. Use Claude Code to fill in detailed content")
    info("  3. Customize for your project")


scaffold_app.command()(setup_project)
review_app.command()(bulk_review)
docs_app.command()(generate_documentation)

app.command("setup")(setup_project)
app.command("review")(bulk_review)
app.command("docs")(generate_documentation)


def _kit_paths(repo_root: Path | None) -> KitPaths:
    return KitPaths.from_root(repo_root) if repo_root else KitPaths.default()


@contextmanager
def cancel_on_interrupt() -> Generator[threading.Event, None, None]:
    """
    Turn the first Ctrl-C into a cancellation request.

    The yielded event is set on the first SIGINT, which makes directory walks
    stop early while the files found so far are still processed. A second
    Ctrl-C interrupts immediately. Files already written are kept.
    """
    cancel = threading.Event()

    def handler(signum, frame):
        if cancel.is_set():
            raise KeyboardInterrupt
        cancel.set()

    try:
        previous = signal.signal(signal.SIGINT, handler)
    except ValueError:
        # Not on the main thread; leave SIGINT alone.
        yield cancel
        return

    try:
        yield cancel
    finally:
        signal.signal(signal.SIGINT, previous)


@contextmanager
def reporting_errors() -> Generator[None, None, None]:
    """
    Convert kit errors into friendly messages and exit codes.

    KitError subclasses exit with code 1, Ctrl-C with 130, and anything
    unexpected is reported by `print_unexpected_err`.
    """
    try:
        yield
    except typer.Exit:
        raise
    except FileIOError as e:
        print_file_io_err(e)
    except KitError as e:
        error(e.message)
        raise typer.Exit(code=1) from e
    except KeyboardInterrupt as e:
        pr("\n[yellow]Cancelled.[/yellow]")
        raise typer.Exit(code=130) from e
    except Exception as e:  # noqa: BLE001
        # Catch-all so users see a readable report instead of a raw traceback
        print_unexpected_err(e)


def print_file_io_err(e: FileIOError) -> None:
    """
    Displays a user-friendly error message for file I/O operation failures.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]File I/O Error[/bold red]")
    pr(f"The kit encountered an error while working with files: {e.message}")
    if e.file_path:
        pr(f"File path: [yellow]{e.file_path}[/yellow]")

    pr("\n[yellow]Quick Fix:[/yellow] Check file permissions and available disk space.")
    if e.original_exception:
        pr(f"\nTechnical details: {e.original_exception}")

    raise typer.Exit(code=1) from e


def print_unexpected_err(e: Exception) -> None:
    """
    Displays a user-friendly error message for unexpected errors.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Unexpected Error[/bold red]")
    pr("An unexpected error occurred while processing your request.")
    pr(f"\n[yellow]Error Type:[/yellow] {type(e).__name__}")
    pr(f"[yellow]Error Message:[/yellow] {str(e)}")

    pr("\n[yellow]What to do:[/yellow]")
    pr("1. Check that the paths you passed exist and are accessible")
    pr("2. Ensure you have sufficient disk space and permissions")
    pr("3. Re-run with --verbose for more detail")
    pr("4. If the problem persists, please report this issue")

    if e.__cause__:
        pr(f"Caused by: {e.__cause__}")

    raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
