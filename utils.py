"""
Console output helpers shared by every command.

All user-facing messages go through a single Rich console with the
`[INFO]`, `[WARN]`, `[ERROR]` and `[DEBUG]` prefixes the kit has always used.
Debug output is hidden unless verbose mode is switched on.
"""

from rich.console import Console
from rich.markup import escape

console: Console = Console(highlight=False)

_verbose: bool = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def info(message: str) -> None:
    console.print(f"[green]\\[INFO][/green] {escape(message)}")


def warn(message: str) -> None:
    console.print(f"[yellow]\\[WARN][/yellow] {escape(message)}")


def error(message: str) -> None:
    console.print(f"[red]\\[ERROR][/red] {escape(message)}")


def debug(
    *values: object,
    sep: str = " ",
) -> None:
    """
    Print a debug message in blue when verbose mode is enabled.

    Args:
        *values: Variable number of objects to print. All values are converted to strings.
        sep: Separator string between values. Defaults to a single space.
    """
    if not _verbose:
        return

    message = sep.join(str(v) for v in values)
    console.print(f"[blue]\\[DEBUG][/blue] {escape(message)}")
