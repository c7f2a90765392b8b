"""
Application-wide constants and configuration mappings.

This module defines the static tables used throughout the Claude DevOps Kit:
project type aliases and scaffold layouts, the extension map used by the file
classifier, the marker substrings that identify Kubernetes manifests, and the
default content written into new projects.
"""

from typing import Final, Mapping
from models import FileType, ProjectLayout, ProjectType


# Every spelling accepted on the command line, mapped to its canonical type.
PROJECT_TYPE_ALIASES: Final[Mapping[str, ProjectType]] = {
    "terraform": ProjectType.TERRAFORM,
    "kubernetes": ProjectType.KUBERNETES,
    "k8s": ProjectType.KUBERNETES,
    "python": ProjectType.PYTHON,
    "cicd": ProjectType.CICD,
    "ci-cd": ProjectType.CICD,
}

# Scaffold layout for each project type. Paths are relative to the repository
# root (template) or to the new project directory (directories, files).
PROJECT_LAYOUTS: Final[Mapping[ProjectType, ProjectLayout]] = {
    ProjectType.TERRAFORM: {
        "template": "templates/terraform/CLAUDE.md",
        "config_dir": "terraform-project",
        "directories": ("modules",),
        "files": ("main.tf", "variables.tf", "outputs.tf", "versions.tf"),
    },
    ProjectType.KUBERNETES: {
        "template": "templates/kubernetes/CLAUDE.md",
        "config_dir": "k8s-project",
        "directories": (
            "base",
            "overlays/dev",
            "overlays/staging",
            "overlays/prod",
        ),
        "files": ("base/kustomization.yaml",),
    },
    ProjectType.PYTHON: {
        "template": "templates/python/CLAUDE.md",
        "config_dir": "python-project",
        "directories": ("src/{name}", "tests"),
        "files": (
            "src/{name}/__init__.py",
            "requirements.txt",
            "requirements-dev.txt",
        ),
    },
    ProjectType.CICD: {
        "template": "templates/cicd/CLAUDE.md",
        "config_dir": None,
        "directories": (),
        "files": (),
    },
}

# Name of the assistant configuration subtree inside configs/<type>-project.
ASSISTANT_CONFIG_DIR: Final[str] = ".claude"

# Extension (lowercase, with dot) to file type. YAML is resolved by content.
EXTENSION_FILE_TYPES: Final[Mapping[str, FileType]] = {
    ".tf": FileType.TERRAFORM,
    ".tfvars": FileType.TERRAFORM,
    ".py": FileType.PYTHON,
    ".sh": FileType.SHELL,
    ".bash": FileType.SHELL,
}

YAML_EXTENSIONS: Final[frozenset[str]] = frozenset({".yaml", ".yml"})

# Substrings whose presence anywhere in a YAML file marks it as a manifest.
KUBERNETES_MARKERS: Final[tuple[str, ...]] = ("apiVersion:", "kind:")

# Extensions walked by the bulk reviewer in directory mode.
REVIEWABLE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".tf", ".tfvars", ".yaml", ".yml", ".py", ".sh"}
)

# Values accepted by `bulk-review --type`.
REVIEW_TYPE_FILTERS: Final[tuple[str, ...]] = (
    "all",
    FileType.TERRAFORM,
    FileType.KUBERNETES,
    FileType.PYTHON,
    FileType.YAML,
    FileType.SHELL,
)

# Marker files checked at the top of a source directory by the doc generator.
PYTHON_MARKER_FILES: Final[tuple[str, ...]] = ("requirements.txt", "setup.py")
NODEJS_MARKER_FILES: Final[tuple[str, ...]] = ("package.json",)

# Lines of a Terraform file listed in API.md.
TERRAFORM_BLOCK_PREFIXES: Final[tuple[str, ...]] = ("resource ", "module ", "data ")

DEFAULT_PROMPT_FILE: Final[str] = "security-review.md"
DEFAULT_REVIEW_OUTPUT: Final[str] = "review-report.md"
DEFAULT_DOCS_OUTPUT: Final[str] = "./docs"
DOCS_STYLESHEET: Final[str] = "style.css"

TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

FALLBACK_PROMPT: Final[str] = """# Security Review

This is a bulk security review of the specified files.
"""

DEFAULT_GITIGNORE: Final[str] = """# OS files
.DS_Store
Thumbs.db

# Editor files
.vscode/
.idea/
*.swp
*.swo

# Environment
.env
.venv
venv/

# Temporary files
*.tmp
*.log
"""
