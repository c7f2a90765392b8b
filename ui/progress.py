"""
Progress reporting for long file enumerations.

Core functions report progress through the `ProgressDisplay` protocol so they
stay independent of the terminal UI. `RichProgressDisplay` renders a Rich
progress bar; `NoOpProgressDisplay` is used in tests and non-interactive runs.
"""

from enum import StrEnum
from types import TracebackType
from typing import Protocol

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)

from utils import console


class ProgressState(StrEnum):
    """Colors used for the task description in each phase."""

    IN_PROGRESS = "magenta"
    COMPLETE = "green"


def create_progress() -> Progress:
    """Build the Rich progress bar used by every command."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=False,
    )


class ProgressDisplay(Protocol):
    """
    Protocol for progress reporting.

    The lifecycle is:
    1. Context manager entry (__enter__)
    2. on_start() - Called once at the beginning
    3. on_update() - Called once per processed item (or batch)
    4. on_complete() - Called once at the end
    5. Context manager exit (__exit__)
    """

    def __enter__(self) -> "ProgressDisplay": ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    def on_start(self, description: str, total: int | None) -> None: ...

    def on_update(self, *, advance: int = 1) -> None: ...

    def on_complete(self, description: str) -> None: ...


class RichProgressDisplay:
    """
    Rich UI implementation of ProgressDisplay.

    The Rich Progress instance is created on context entry, so the display
    must be used as `with RichProgressDisplay() as rpd:`.
    """

    def __init__(self) -> None:
        self._progress: Progress | None = None
        self._task: TaskID | None = None
        self._total: int | None = None

    def __enter__(self) -> "RichProgressDisplay":
        self._progress = create_progress()
        self._progress.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._progress:
            self._progress.__exit__(exc_type, exc_val, exc_tb)

    def _require_progress(self) -> Progress:
        if not self._progress:
            raise RuntimeError(
                "RichProgressDisplay must be used as a context manager. "
                "Use: with RichProgressDisplay() as rpd:"
            )
        return self._progress

    def on_start(self, description: str, total: int | None) -> None:
        progress = self._require_progress()
        self._total = total
        self._task = progress.add_task(
            f"[{ProgressState.IN_PROGRESS}]{description}", total=total
        )

    def on_update(self, *, advance: int = 1) -> None:
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called before on_update()")
        progress.update(self._task, advance=advance)

    def on_complete(self, description: str) -> None:
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called before on_complete()")

        progress.update(
            self._task,
            completed=self._total or 0,
            description=f"[{ProgressState.COMPLETE}]{description}",
        )


class NoOpProgressDisplay:
    """ProgressDisplay that does nothing. Used in tests."""

    def __enter__(self) -> "NoOpProgressDisplay":
        return self

    def __exit__(self, *args) -> None:
        pass

    def on_start(self, description: str, total: int | None) -> None:
        pass

    def on_update(self, *, advance: int = 1) -> None:
        pass

    def on_complete(self, description: str) -> None:
        pass
