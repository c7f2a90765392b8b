"""
Tests for the scaffolding module.

Tests cover:
- Project type and template resolution
- Plan validation errors raised before any file is written
- Skeleton layout per project type
- Existing directory handling (force, confirm, abort)
- Rollback of partially created projects
- Git initialization outcomes
"""

import subprocess
from pathlib import Path

import pytest

from constants import DEFAULT_GITIGNORE
from core.config import KitPaths
from core.exceptions import (
    AlreadyExistsError,
    ConfigurationError,
    FileWriteError,
    NotFoundError,
    UnknownTypeError,
    UserAbort,
)
from core.scaffolding import (
    ScaffoldTransaction,
    build_steps,
    execute_plan,
    init_git_repository,
    plan_scaffold,
    resolve_project_type,
    scaffold,
)
from models import ProjectType

# ============================================================================
# Tests for resolve_project_type
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ("terraform", ProjectType.TERRAFORM),
        ("kubernetes", ProjectType.KUBERNETES),
        ("k8s", ProjectType.KUBERNETES),
        ("python", ProjectType.PYTHON),
        ("cicd", ProjectType.CICD),
        ("ci-cd", ProjectType.CICD),
        ("Terraform", ProjectType.TERRAFORM),
    ],
)
def test_resolve_project_type_accepts_aliases(value, expected):
    assert resolve_project_type(value) == expected


@pytest.mark.unit
def test_resolve_project_type_unknown_lists_choices():
    with pytest.raises(UnknownTypeError) as exc_info:
        resolve_project_type("ansible")

    assert exc_info.value.value == "ansible"
    assert "terraform" in exc_info.value.choices
    assert "ansible" in exc_info.value.message


# ============================================================================
# Tests for plan_scaffold - validation happens before writing
# ============================================================================


@pytest.mark.unit
def test_plan_requires_project_name(kit_paths, workspace):
    with pytest.raises(ConfigurationError, match="Project name is required"):
        plan_scaffold(kit_paths, "terraform", "", target_dir=workspace)


@pytest.mark.unit
def test_plan_requires_type_or_template(kit_paths, workspace):
    with pytest.raises(ConfigurationError):
        plan_scaffold(kit_paths, None, "demo", target_dir=workspace)


@pytest.mark.unit
def test_unknown_type_writes_nothing(kit_paths, workspace, no_git):
    with pytest.raises(UnknownTypeError):
        scaffold(kit_paths, "ansible", "demo", target_dir=workspace, git_client=no_git)

    assert list(workspace.iterdir()) == []


@pytest.mark.unit
def test_missing_explicit_template_writes_nothing(kit_paths, workspace, no_git):
    with pytest.raises(NotFoundError, match="Template file not found"):
        scaffold(
            kit_paths,
            "terraform",
            "demo",
            target_dir=workspace,
            explicit_template="nope.md",
            git_client=no_git,
        )

    assert list(workspace.iterdir()) == []


@pytest.mark.unit
def test_missing_type_template_raises(kit_paths, workspace):
    (kit_paths.templates_dir / "python" / "CLAUDE.md").unlink()

    with pytest.raises(NotFoundError, match="Template not found"):
        plan_scaffold(kit_paths, "python", "demo", target_dir=workspace)


@pytest.mark.unit
def test_template_outside_checkout_suggests_repo_root(tmp_path, workspace):
    """An install without the kit data points the user at --repo-root."""
    paths = KitPaths.from_root(tmp_path / "site-packages")

    with pytest.raises(NotFoundError, match="--repo-root") as exc_info:
        plan_scaffold(paths, "terraform", "demo", target_dir=workspace)

    assert str(paths.templates_dir / "terraform" / "CLAUDE.md") in exc_info.value.message
    assert list(workspace.iterdir()) == []


@pytest.mark.unit
def test_explicit_template_resolved_relative_to_repo_root(kit_paths, workspace, monkeypatch):
    monkeypatch.chdir(workspace)
    plan = plan_scaffold(
        kit_paths,
        "terraform",
        "demo",
        target_dir=workspace,
        explicit_template="templates/python/CLAUDE.md",
    )

    assert plan.template_path == kit_paths.repo_root / "templates/python/CLAUDE.md"
    assert plan.project_type == ProjectType.TERRAFORM


@pytest.mark.unit
def test_explicit_template_with_unknown_type_has_no_skeleton(tmp_path, kit_paths, workspace):
    custom = tmp_path / "custom.md"
    custom.write_text("# Custom\n", encoding="utf-8")

    plan = plan_scaffold(
        kit_paths, "ansible", "demo", target_dir=workspace, explicit_template=custom
    )

    assert plan.project_type is None
    assert plan.config_directory is None
    assert [step.description for step in build_steps(plan)][-1] == "Create .gitignore"
    assert len(build_steps(plan)) == 3


@pytest.mark.unit
def test_plan_picks_up_example_configuration(kit_paths, workspace):
    plan = plan_scaffold(kit_paths, "terraform", "demo", target_dir=workspace)
    assert plan.config_directory == kit_paths.configs_dir / "terraform-project" / ".claude"


@pytest.mark.unit
def test_plan_without_example_configuration(kit_paths, workspace):
    plan = plan_scaffold(kit_paths, "kubernetes", "demo", target_dir=workspace)
    assert plan.config_directory is None


# ============================================================================
# Tests for execute_plan - project layouts
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("project_type", ["terraform", "kubernetes", "python", "cicd"])
def test_template_copied_byte_for_byte(
    kit_paths, workspace, no_git, template_content, project_type
):
    result = scaffold(kit_paths, project_type, "demo", target_dir=workspace, git_client=no_git)

    claude_md = result.project_dir / "CLAUDE.md"
    assert claude_md.read_bytes() == template_content[project_type].encode("utf-8")
    assert (result.project_dir / ".gitignore").read_text(encoding="utf-8") == DEFAULT_GITIGNORE


@pytest.mark.unit
def test_terraform_layout(kit_paths, workspace, no_git):
    result = scaffold(kit_paths, "terraform", "demo", target_dir=workspace, git_client=no_git)
    project = workspace / "demo"

    assert result.project_dir == project
    assert (project / "modules").is_dir()
    for name in ("main.tf", "variables.tf", "outputs.tf", "versions.tf"):
        assert (project / name).is_file()
        assert (project / name).stat().st_size == 0
    assert (project / ".claude" / "settings.json").is_file()
    assert (project / ".claude" / "commands" / "plan.md").read_text(
        encoding="utf-8"
    ) == "Run terraform plan.\n"


@pytest.mark.unit
def test_kubernetes_layout(kit_paths, workspace, no_git):
    scaffold(kit_paths, "k8s", "cluster", target_dir=workspace, git_client=no_git)
    project = workspace / "cluster"

    for overlay in ("dev", "staging", "prod"):
        assert (project / "overlays" / overlay).is_dir()
    assert (project / "base" / "kustomization.yaml").is_file()
    assert not (project / ".claude").exists()


@pytest.mark.unit
def test_python_layout_uses_project_name(kit_paths, workspace, no_git):
    scaffold(kit_paths, "python", "mytool", target_dir=workspace, git_client=no_git)
    project = workspace / "mytool"

    assert (project / "src" / "mytool" / "__init__.py").is_file()
    assert (project / "tests").is_dir()
    assert (project / "requirements.txt").is_file()
    assert (project / "requirements-dev.txt").is_file()


@pytest.mark.unit
def test_cicd_layout_has_no_skeleton(kit_paths, workspace, no_git):
    scaffold(kit_paths, "ci-cd", "pipelines", target_dir=workspace, git_client=no_git)
    project = workspace / "pipelines"

    assert sorted(p.name for p in project.iterdir()) == [".gitignore", "CLAUDE.md"]


@pytest.mark.unit
def test_target_directory_created_when_missing(kit_paths, tmp_path, no_git):
    target = tmp_path / "a" / "b"
    result = scaffold(kit_paths, "cicd", "demo", target_dir=target, git_client=no_git)
    assert (target / "demo" / "CLAUDE.md").is_file()
    assert result.created[0] == tmp_path / "a"


# ============================================================================
# Tests for execute_plan - existing directories
# ============================================================================


@pytest.mark.unit
def test_existing_directory_without_force_fails(kit_paths, workspace, no_git):
    (workspace / "demo").mkdir()

    with pytest.raises(AlreadyExistsError, match="--force"):
        scaffold(kit_paths, "terraform", "demo", target_dir=workspace, git_client=no_git)

    assert list((workspace / "demo").iterdir()) == []


@pytest.mark.unit
def test_existing_directory_with_force_keeps_existing_files(kit_paths, workspace, no_git):
    project = workspace / "demo"
    project.mkdir()
    (project / ".gitignore").write_text("custom\n", encoding="utf-8")
    (project / "main.tf").write_text('resource "x" "y" {}\n', encoding="utf-8")

    result = scaffold(
        kit_paths, "terraform", "demo", target_dir=workspace, force=True, git_client=no_git
    )

    assert (project / ".gitignore").read_text(encoding="utf-8") == "custom\n"
    assert (project / "main.tf").read_text(encoding="utf-8") == 'resource "x" "y" {}\n'
    assert project / "main.tf" not in result.created
    assert project / "variables.tf" in result.created


@pytest.mark.unit
def test_existing_directory_confirmed(kit_paths, workspace, no_git):
    (workspace / "demo").mkdir()
    asked = []

    def confirm(path: Path) -> bool:
        asked.append(path)
        return True

    scaffold(
        kit_paths, "cicd", "demo", target_dir=workspace, confirm=confirm, git_client=no_git
    )

    assert asked == [workspace / "demo"]
    assert (workspace / "demo" / "CLAUDE.md").is_file()


@pytest.mark.unit
def test_existing_directory_declined(kit_paths, workspace, no_git):
    (workspace / "demo").mkdir()

    with pytest.raises(UserAbort):
        scaffold(
            kit_paths,
            "cicd",
            "demo",
            target_dir=workspace,
            confirm=lambda path: False,
            git_client=no_git,
        )

    assert list((workspace / "demo").iterdir()) == []


# ============================================================================
# Tests for ScaffoldTransaction - rollback
# ============================================================================


@pytest.mark.unit
def test_failing_step_rolls_back_created_paths(kit_paths, workspace, no_git, mocker):
    plan = plan_scaffold(kit_paths, "terraform", "demo", target_dir=workspace)
    original_touch = ScaffoldTransaction.touch
    calls = []

    def flaky_touch(self, path):
        calls.append(path)
        if len(calls) == 3:
            raise FileWriteError(message="disk full", file_path=str(path))
        original_touch(self, path)

    mocker.patch.object(ScaffoldTransaction, "touch", flaky_touch)

    with pytest.raises(FileWriteError, match="disk full"):
        execute_plan(plan, git_client=no_git)

    assert not (workspace / "demo").exists()
    assert list(workspace.iterdir()) == []
    no_git.is_available.assert_not_called()


@pytest.mark.unit
def test_rollback_keeps_preexisting_files(kit_paths, workspace, no_git, mocker):
    project = workspace / "demo"
    project.mkdir()
    keep = project / "notes.txt"
    keep.write_text("mine\n", encoding="utf-8")
    plan = plan_scaffold(kit_paths, "python", "demo", target_dir=workspace, force=True)

    mocker.patch.object(
        ScaffoldTransaction,
        "write_if_absent",
        side_effect=FileWriteError(message="boom"),
        autospec=True,
    )

    with pytest.raises(FileWriteError):
        execute_plan(plan, git_client=no_git)

    assert sorted(p.name for p in project.iterdir()) == ["notes.txt"]
    assert keep.read_text(encoding="utf-8") == "mine\n"


@pytest.mark.unit
def test_transaction_tracks_only_new_paths(tmp_path):
    existing = tmp_path / "existing"
    existing.mkdir()

    with ScaffoldTransaction() as tx:
        tx.make_dir(existing / "a" / "b")
        tx.touch(existing / "a" / "b" / "f.txt")
        tx.write_if_absent(existing / "g.txt", "x")

    assert tx.created == [
        existing / "a",
        existing / "a" / "b",
        existing / "a" / "b" / "f.txt",
        existing / "g.txt",
    ]


@pytest.mark.unit
def test_transaction_make_dir_failure_wraps_error(tmp_path, mocker):
    mocker.patch.object(Path, "mkdir", side_effect=PermissionError("denied"))

    with pytest.raises(FileWriteError) as exc_info:
        with ScaffoldTransaction() as tx:
            tx.make_dir(tmp_path / "blocked")

    assert isinstance(exc_info.value.original_exception, PermissionError)
    assert tx.created == []


@pytest.mark.unit
def test_transaction_write_if_absent_skips_existing(tmp_path):
    target = tmp_path / ".gitignore"
    target.write_text("keep\n", encoding="utf-8")

    with ScaffoldTransaction() as tx:
        written = tx.write_if_absent(target, "replace\n")

    assert written is False
    assert target.read_text(encoding="utf-8") == "keep\n"
    assert tx.created == []


# ============================================================================
# Tests for init_git_repository
# ============================================================================


@pytest.mark.unit
def test_git_missing_is_skipped(no_git):
    assert init_git_repository(no_git) is False
    no_git.init.assert_not_called()


@pytest.mark.mock
def test_git_existing_repo_is_skipped(mocker):
    client = mocker.MagicMock()
    client.is_available.return_value = True
    client.is_repo.return_value = True

    assert init_git_repository(client) is False
    client.init.assert_not_called()


@pytest.mark.mock
def test_git_init_runs(mocker):
    client = mocker.MagicMock()
    client.is_available.return_value = True
    client.is_repo.return_value = False

    assert init_git_repository(client) is True
    client.init.assert_called_once_with()


@pytest.mark.mock
def test_git_init_failure_is_a_warning(mocker):
    client = mocker.MagicMock()
    client.is_available.return_value = True
    client.is_repo.return_value = False
    client.init.side_effect = subprocess.CalledProcessError(128, ["git", "init"])

    assert init_git_repository(client) is False


@pytest.mark.mock
def test_git_failure_keeps_scaffold(kit_paths, workspace, mocker):
    client = mocker.MagicMock()
    client.is_available.return_value = True
    client.is_repo.return_value = False
    client.init.side_effect = OSError("exec format error")

    result = scaffold(kit_paths, "cicd", "demo", target_dir=workspace, git_client=client)

    assert result.git_initialized is False
    assert (workspace / "demo" / "CLAUDE.md").is_file()
