"""
Git adapter used when scaffolding a new project.

This module wraps the few git commands the scaffolder needs: checking whether
git is installed, whether a directory is already a repository, and running
`git init`. Git is optional tooling: callers treat its absence as a warning.
"""

import shutil
import subprocess
from pathlib import Path


class GitClient:
    """
    Client for the git executable found on PATH.

    Attributes:
        root: The directory this client operates on.
        executable: Name or path of the git binary.
    """

    def __init__(self, root: Path, executable: str = "git"):
        self.root = root
        self.executable = executable

    def is_available(self) -> bool:
        """Return True when the git executable can be found on PATH."""
        return shutil.which(self.executable) is not None

    def is_repo(self) -> bool:
        """
        Check whether `root` already holds its own repository.

        Only a `.git` entry directly inside root counts; being nested inside
        some parent repository does not.
        """
        return (self.root / ".git").exists()

    def init(self) -> None:
        """
        Run `git init` in root.

        Raises:
            subprocess.CalledProcessError: If git exits with a non-zero status.
            OSError: If the executable cannot be started.
        """
        subprocess.run(
            [self.executable, "init"],
            cwd=self.root,
            text=True,
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
