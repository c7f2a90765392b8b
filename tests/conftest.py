"""
Shared fixtures for the whole test suite.

Provides a throwaway kit repository (templates, one example configuration,
a prompt and the docs stylesheet) and a helper for building source trees.
"""

from pathlib import Path

import pytest

from core.config import KitPaths


TEMPLATE_CONTENT = {
    "terraform": "# Terraform conventions\n\nUse modules.\n",
    "kubernetes": "# Kubernetes conventions\n\nUse kustomize.\n",
    "python": "# Python conventions\n\nUse pytest.\n",
    "cicd": "# CI/CD conventions\n\nPin actions.\n",
}


@pytest.fixture
def kit_root(tmp_path):
    """A minimal kit repository: templates, one example config and a prompt."""
    root = tmp_path / "kit"
    for project_type, content in TEMPLATE_CONTENT.items():
        template = root / "templates" / project_type / "CLAUDE.md"
        template.parent.mkdir(parents=True)
        template.write_text(content, encoding="utf-8")

    settings = root / "configs" / "terraform-project" / ".claude" / "settings.json"
    settings.parent.mkdir(parents=True)
    settings.write_text('{"permissions": {}}\n', encoding="utf-8")

    commands = root / "configs" / "terraform-project" / ".claude" / "commands" / "plan.md"
    commands.parent.mkdir(parents=True)
    commands.write_text("Run terraform plan.\n", encoding="utf-8")

    prompt = root / "prompts" / "security-review.md"
    prompt.parent.mkdir(parents=True)
    prompt.write_text("# Security Review\n\nCheck for secrets.\n", encoding="utf-8")

    (root / "docs").mkdir()
    (root / "docs" / "style.css").write_text("body {}\n", encoding="utf-8")
    return root


@pytest.fixture
def template_content():
    return dict(TEMPLATE_CONTENT)


@pytest.fixture
def kit_paths(kit_root):
    return KitPaths.from_root(kit_root)


@pytest.fixture
def make_tree():
    """Factory that writes a {relative_path: content} mapping under a root."""

    def _factory(root: Path, files: dict[str, str]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for rel_path, content in files.items():
            file_path = root / rel_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        return root

    return _factory
