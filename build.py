"""
Build script for creating a standalone executable using PyInstaller.

This script bundles the umbrella `claude-kit` CLI together with the templates,
example configurations, prompts and docs stylesheet it reads at runtime.
"""

import platform
import PyInstaller.__main__  # type: ignore

SEPARATOR = ";" if platform.system() == "Windows" else ":"
DATA_DIRS = ("templates", "configs", "prompts", "docs")

PyInstaller.__main__.run(
    [
        "main.py",
        "--onefile",
        *(f"--add-data={d}{SEPARATOR}{d}" for d in DATA_DIRS),
        "--name=claude-kit",
    ]
)
