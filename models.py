"""
Type definitions and data models used across the Claude DevOps Kit CLI.

This module contains shared type definitions including enums and TypedDict
structures that are used throughout the codebase for type safety and consistency.
"""

from enum import StrEnum
from typing import TypedDict


class ProjectType(StrEnum):
    """
    Enumeration of project types that can be scaffolded.

    Each value is the canonical name accepted on the command line. Aliases such
    as "k8s" or "ci-cd" are resolved to these values through PROJECT_TYPE_ALIASES
    in `constants.py`.
    """

    TERRAFORM = "terraform"
    KUBERNETES = "kubernetes"
    PYTHON = "python"
    CICD = "cicd"


class DetectedProjectType(StrEnum):
    """Coarse project type inferred from marker files by the doc generator."""

    TERRAFORM = "terraform"
    PYTHON = "python"
    NODEJS = "nodejs"
    KUBERNETES = "kubernetes"
    GENERIC = "generic"


class FileType(StrEnum):
    """
    Coarse content type of a single file.

    Derived from the file extension, with a content check for YAML files to tell
    Kubernetes manifests apart from plain YAML.
    """

    TERRAFORM = "terraform"
    KUBERNETES = "kubernetes"
    YAML = "yaml"
    PYTHON = "python"
    SHELL = "shell"
    OTHER = "other"


class DocType(StrEnum):
    API = "api"
    ARCHITECTURE = "architecture"
    README = "readme"


class OutputFormat(StrEnum):
    MARKDOWN = "markdown"
    HTML = "html"


class ProjectLayout(TypedDict):
    """
    Type definition for the per-project-type scaffold configuration.

    Attributes:
        template: Template path relative to the repository root, copied to
            `<project>/CLAUDE.md`.
        config_dir: Name of the example configuration directory under `configs/`
            whose `.claude` subtree is copied into the project, or None.
        directories: Directories to create, relative to the project directory.
            "{name}" is replaced with the project name.
        files: Empty files to create, relative to the project directory.
            "{name}" is replaced with the project name.
    """

    template: str
    config_dir: str | None
    directories: tuple[str, ...]
    files: tuple[str, ...]
