"""
Pandoc adapter for rendering generated markdown to standalone HTML.

Pandoc is optional: `generate-docs --format html` warns and skips the
conversion when it is not installed.
"""

import shutil
import subprocess
from pathlib import Path


class PandocConverter:
    def __init__(self, executable: str = "pandoc", stylesheet: Path | None = None):
        self.executable = executable
        self.stylesheet = stylesheet

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def convert(self, markdown_file: Path, html_file: Path) -> None:
        """
        Render one markdown file to a standalone HTML file.

        Raises:
            subprocess.CalledProcessError: If pandoc exits with a non-zero status.
            OSError: If the executable cannot be started.
        """
        cmd = [self.executable, str(markdown_file), "-o", str(html_file), "--standalone"]
        if self.stylesheet is not None:
            cmd.append(f"--css={self.stylesheet}")

        subprocess.run(
            cmd,
            text=True,
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
