"""Project scaffolding.

Creates a new project directory from a `CLAUDE.md` template and lays down the
skeleton for its project type.

The work is split in two phases:

1. **Planning** (`plan_scaffold`): validates the arguments and resolves the
   template and example configuration. Every validation error is raised here,
   before anything touches the file system.
2. **Execution** (`execute_plan`): runs an ordered list of `ScaffoldStep`s
   inside a `ScaffoldTransaction`. The transaction records every path it
   creates; if a step fails, those paths (and only those) are removed again
   and the error is re-raised. Files that existed before the run are never
   deleted, and files overwritten by a forced run are not restored.

Initializing a git repository is the last step and runs outside the
transaction: git is optional tooling, so a missing binary or a failing
`git init` is reported as a warning.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Callable

from adapters.git import GitClient
from constants import (
    ASSISTANT_CONFIG_DIR,
    DEFAULT_GITIGNORE,
    PROJECT_LAYOUTS,
    PROJECT_TYPE_ALIASES,
)
from core.config import KitPaths
from core.exceptions import (
    AlreadyExistsError,
    ConfigurationError,
    FileWriteError,
    NotFoundError,
    UnknownTypeError,
    UserAbort,
)
from core.models import ScaffoldPlan, ScaffoldResult
from models import ProjectType
from utils import debug, info, warn

ConfirmFn = Callable[[Path], bool]


def resolve_project_type(value: str) -> ProjectType:
    """
    Map a command-line project type (including aliases) to a ProjectType.

    Raises:
        UnknownTypeError: If the value is not a known type or alias.
    """
    try:
        return PROJECT_TYPE_ALIASES[value.strip().lower()]
    except KeyError:
        raise UnknownTypeError(
            value, choices=list(ProjectType), kind="project type"
        ) from None


def resolve_template(
    paths: KitPaths,
    project_type: ProjectType | None,
    explicit_template: str | Path | None = None,
) -> Path:
    """
    Find the template that becomes `<project>/CLAUDE.md`.

    An explicit template is looked up as given (relative to the current
    directory), then relative to the repository root. Without one, the
    project type's layout decides.

    Raises:
        NotFoundError: If the resolved template does not exist.
        ConfigurationError: If neither a template nor a type is given.
    """
    if explicit_template:
        candidate = Path(explicit_template)
        if candidate.is_file():
            return candidate
        in_repo = paths.repo_root / candidate
        if in_repo.is_file():
            return in_repo
        raise NotFoundError(
            explicit_template, message=f"Template file not found: {explicit_template}"
        )

    if project_type is None:
        raise ConfigurationError("Project type or template file is required")

    template = paths.repo_root / PROJECT_LAYOUTS[project_type]["template"]
    if not template.is_file():
        raise NotFoundError(
            template,
            message=(
                f"Template not found: {template}. "
                "Pass --repo-root to point at a kit checkout."
            ),
        )
    return template


def resolve_config_directory(
    paths: KitPaths, project_type: ProjectType | None
) -> Path | None:
    """Return the example `.claude` directory for the type, when one ships."""
    if project_type is None:
        return None
    config_name = PROJECT_LAYOUTS[project_type]["config_dir"]
    if config_name is None:
        return None
    config_dir = paths.configs_dir / config_name / ASSISTANT_CONFIG_DIR
    return config_dir if config_dir.is_dir() else None


def plan_scaffold(
    paths: KitPaths,
    project_type: str | None,
    project_name: str,
    target_dir: Path = Path("."),
    explicit_template: str | Path | None = None,
    force: bool = False,
) -> ScaffoldPlan:
    """
    Validate the arguments and resolve everything the scaffold needs.

    When an explicit template is given, an unrecognized project type is
    tolerated: the template is copied and no type-specific skeleton is made.

    Raises:
        ConfigurationError: If the name is empty, or neither a type nor a
            template was supplied.
        UnknownTypeError: If the type is unknown and no template was supplied.
        NotFoundError: If the template does not exist.
    """
    if not project_name or not project_name.strip():
        raise ConfigurationError("Project name is required")
    if not project_type and not explicit_template:
        raise ConfigurationError("Project type or template file is required")

    resolved_type: ProjectType | None = None
    if project_type:
        try:
            resolved_type = resolve_project_type(project_type)
        except UnknownTypeError:
            if not explicit_template:
                raise
            warn(f"Unknown project type '{project_type}': no skeleton will be created")

    template = resolve_template(paths, resolved_type, explicit_template)

    return ScaffoldPlan(
        project_type=resolved_type,
        project_name=project_name.strip(),
        target_directory=Path(target_dir),
        template_path=template,
        config_directory=resolve_config_directory(paths, resolved_type),
        force=force,
    )


class ScaffoldTransaction:
    """
    Tracks the paths created during a scaffold so they can be removed on failure.

    Used as a context manager: when the block raises, every tracked path is
    removed in reverse creation order and the exception propagates.

    Attributes:
        created: Paths created by this transaction, in creation order.
    """

    def __init__(self) -> None:
        self.created: list[Path] = []

    def __enter__(self) -> "ScaffoldTransaction":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.rollback()

    def make_dir(self, path: Path) -> None:
        """Create a directory and any missing parents, tracking each new one."""
        missing = [p for p in (path, *path.parents) if not p.exists()]
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.created.extend(p for p in reversed(missing) if p.exists())
            raise FileWriteError(
                message=f"Failed to create directory: {path}",
                file_path=str(path),
                original_exception=e,
            ) from e
        self.created.extend(reversed(missing))

    def copy_file(self, source: Path, destination: Path) -> None:
        """Copy a file, overwriting the destination."""
        existed = destination.exists()
        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to copy {source} to {destination}",
                file_path=str(destination),
                original_exception=e,
            ) from e
        if not existed:
            self.created.append(destination)

    def copy_tree(self, source: Path, destination: Path) -> None:
        """Recursively copy a directory, merging into an existing destination."""
        self.make_dir(destination)
        for item in sorted(source.rglob("*")):
            target = destination / item.relative_to(source)
            if item.is_dir():
                self.make_dir(target)
            else:
                self.make_dir(target.parent)
                self.copy_file(item, target)

    def touch(self, path: Path) -> None:
        """Create an empty file, leaving an existing one untouched."""
        if path.exists():
            return
        try:
            path.touch()
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to create file: {path}",
                file_path=str(path),
                original_exception=e,
            ) from e
        self.created.append(path)

    def write_if_absent(self, path: Path, content: str) -> bool:
        """Write a text file unless it already exists. Returns True if written."""
        if path.exists():
            return False
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to write file: {path}",
                file_path=str(path),
                original_exception=e,
            ) from e
        self.created.append(path)
        return True

    def rollback(self) -> None:
        """Remove every tracked path, newest first."""
        for path in reversed(self.created):
            try:
                if path.is_dir() and not path.is_symlink():
                    shutil.rmtree(path)
                else:
                    path.unlink(missing_ok=True)
            except OSError as e:
                warn(f"Could not remove {path} during cleanup: {e}")
        if self.created:
            warn(f"Removed {len(self.created)} path(s) created by the failed setup")
        self.created.clear()


def _create_empty_file(tx: ScaffoldTransaction, path: Path) -> None:
    tx.make_dir(path.parent)
    tx.touch(path)


@dataclass(frozen=True)
class ScaffoldStep:
    description: str
    action: Callable[[ScaffoldTransaction], None]


def build_steps(plan: ScaffoldPlan) -> list[ScaffoldStep]:
    """
    Turn a plan into the ordered list of file-system operations to perform.

    Order: project directory, CLAUDE.md, example `.claude` configuration,
    type skeleton (directories, then empty files), `.gitignore`.
    """
    project_dir = plan.project_dir
    steps = [
        ScaffoldStep(
            f"Create project directory {project_dir}",
            lambda tx: tx.make_dir(project_dir),
        ),
        ScaffoldStep(
            "Copy CLAUDE.md template",
            lambda tx: tx.copy_file(plan.template_path, project_dir / "CLAUDE.md"),
        ),
    ]

    config_directory = plan.config_directory
    if config_directory is not None:
        steps.append(
            ScaffoldStep(
                f"Copy {ASSISTANT_CONFIG_DIR} configuration",
                lambda tx: tx.copy_tree(
                    config_directory, project_dir / ASSISTANT_CONFIG_DIR
                ),
            )
        )

    if plan.project_type is not None:
        layout = PROJECT_LAYOUTS[plan.project_type]
        for directory in layout["directories"]:
            target = project_dir / directory.format(name=plan.project_name)
            steps.append(
                ScaffoldStep(f"Create {target}", lambda tx, t=target: tx.make_dir(t))
            )
        for file_name in layout["files"]:
            target = project_dir / file_name.format(name=plan.project_name)
            steps.append(
                ScaffoldStep(
                    f"Create {target}",
                    lambda tx, t=target: _create_empty_file(tx, t),
                )
            )

    steps.append(
        ScaffoldStep(
            "Create .gitignore",
            lambda tx: tx.write_if_absent(project_dir / ".gitignore", DEFAULT_GITIGNORE),
        )
    )
    return steps


def init_git_repository(git_client: GitClient) -> bool:
    """
    Initialize a git repository in the client's root when possible.

    Returns:
        True if `git init` ran successfully, False if it was skipped or failed.
    """
    if not git_client.is_available():
        warn("git not found on PATH. Skipping repository initialization.")
        return False
    if git_client.is_repo():
        debug("Git repository already present in", git_client.root)
        return False
    try:
        git_client.init()
    except (subprocess.CalledProcessError, OSError) as e:
        warn(f"git init failed: {e}")
        return False
    info("Initialized git repository")
    return True


def execute_plan(
    plan: ScaffoldPlan,
    confirm: ConfirmFn | None = None,
    git_client: GitClient | None = None,
) -> ScaffoldResult:
    """
    Perform the scaffold described by a plan.

    Args:
        plan: A validated plan from `plan_scaffold`.
        confirm: Asked whether to continue when the project directory already
            exists and `plan.force` is False. Without it the run fails.
        git_client: Client used for repository initialization. Defaults to a
            GitClient rooted at the project directory.

    Returns:
        The ScaffoldResult, listing every path this run created.

    Raises:
        AlreadyExistsError: If the project directory exists, force is off and
            no confirmation callback was given.
        UserAbort: If the confirmation callback declined.
        FileWriteError: If a step fails. Paths created so far are removed first.
    """
    project_dir = plan.project_dir

    if project_dir.exists():
        warn(f"Directory already exists: {project_dir}")
    if project_dir.exists() and not plan.force:
        if confirm is None:
            raise AlreadyExistsError(project_dir)
        if not confirm(project_dir):
            raise UserAbort()

    info(f"Setting up Claude Code project: {plan.project_name}")
    info(f"Project type: {plan.project_type or 'custom template'}")
    info(f"Target directory: {project_dir}")

    with ScaffoldTransaction() as tx:
        for step in build_steps(plan):
            debug(step.description)
            step.action(tx)

    result = ScaffoldResult(project_dir=project_dir, created=list(tx.created))

    git_client = git_client if git_client is not None else GitClient(project_dir)
    result.git_initialized = init_git_repository(git_client)

    info("Project setup complete!")
    return result


def scaffold(
    paths: KitPaths,
    project_type: str | None,
    project_name: str,
    target_dir: Path = Path("."),
    explicit_template: str | Path | None = None,
    force: bool = False,
    confirm: ConfirmFn | None = None,
    git_client: GitClient | None = None,
) -> ScaffoldResult:
    """Plan and execute a scaffold in one call."""
    plan = plan_scaffold(
        paths,
        project_type,
        project_name,
        target_dir=target_dir,
        explicit_template=explicit_template,
        force=force,
    )
    return execute_plan(plan, confirm=confirm, git_client=git_client)
