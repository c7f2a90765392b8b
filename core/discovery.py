"""
Directory enumeration shared by the bulk reviewer and the doc generator.

Walks a directory tree and lazily yields file paths filtered by extension.
Directory entries are visited in sorted order so repeated runs over an
unchanged tree produce the same sequence.
"""

import os
import threading
from pathlib import Path
from typing import Generator, Iterable

from utils import debug, warn

# Never descended into during enumeration.
SKIPPED_DIRS: frozenset[str] = frozenset({".git"})


def walk_files(
    root: Path,
    extensions: Iterable[str] | None = None,
    exclude_dirs: Iterable[str] = (),
    cancel: threading.Event | None = None,
) -> Generator[Path, None, None]:
    """
    Lazily yield the files under `root` whose extension is in `extensions`.

    Yielded paths are `root` joined with the relative location of each file,
    mirroring what `find <root>` prints. Unreadable directories are reported
    and skipped.

    Args:
        root: Directory to walk.
        extensions: Lowercase extensions including the dot (".tf"). None yields
            every file.
        exclude_dirs: Directory names to prune in addition to SKIPPED_DIRS.
        cancel: When set, enumeration stops before the next file is yielded.
            Files already yielded are unaffected.

    Yields:
        Path: One path per matching file.
    """
    allowed = frozenset(e.lower() for e in extensions) if extensions else None
    pruned = SKIPPED_DIRS | frozenset(exclude_dirs)

    def on_error(err: OSError) -> None:
        warn(f"Cannot read directory: {err.filename}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in pruned)
        for name in sorted(filenames):
            if cancel is not None and cancel.is_set():
                debug("Enumeration cancelled under", dirpath)
                return
            file_path = Path(dirpath) / name
            if allowed is not None and file_path.suffix.lower() not in allowed:
                continue
            if not file_path.is_file():
                continue
            yield file_path
