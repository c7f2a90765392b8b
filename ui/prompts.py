"""
Interactive prompts for `setup-claude-project --interactive`.

Non-interactive runs never reach this module: a missing project type is an
error and an existing directory requires --force. With --interactive the
user is asked instead.

Dependencies:
    - inquirer: Interactive terminal prompts
    - rich: Terminal formatting and colors
    - typer: CLI framework integration
"""

from pathlib import Path

import inquirer  # type: ignore
from inquirer.themes import GreenPassion  # type: ignore
from rich import print as pr
import typer

from models import ProjectType


def confirm_overwrite(project_dir: Path) -> bool:
    """
    Ask whether to continue scaffolding into an existing directory.

    Returns:
        True if the user confirmed. Defaults to No, like the old `(y/N)` prompt.

    Raises:
        typer.Exit: If the prompt was cancelled (Ctrl-C).
    """
    questions = [
        inquirer.Confirm(
            "continue",
            message=f"{project_dir} already exists. Continue anyway?",
            default=False,
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())
    if not answers:
        raise typer.Exit(code=1)

    return bool(answers["continue"])


def select_project_type() -> ProjectType:
    """
    Prompt the user to pick a project type when none was given.

    Raises:
        typer.Exit: If the prompt was cancelled.
    """
    pr("\n[bold green]Select the type of project to set up.[/bold green]")

    questions = [
        inquirer.List(
            "project_type",
            message="Hit [ENTER] to make your selection",
            choices=list(ProjectType),
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())
    if not answers:
        raise typer.Exit(code=1)

    return ProjectType(answers["project_type"])


def ask_project_name() -> str:
    """
    Prompt for the project name when it was not given on the command line.

    Raises:
        typer.Exit: If the prompt was cancelled.
    """
    questions = [
        inquirer.Text(
            "project_name",
            message="Project name",
            validate=lambda _, value: bool(value.strip()),
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())
    if not answers:
        raise typer.Exit(code=1)

    return answers["project_name"].strip()
