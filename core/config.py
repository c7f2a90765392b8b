"""
Repository path configuration.

Templates, example configurations, prompts and the docs stylesheet all live
in the kit's own repository. `KitPaths` is built once at startup and handed
to each component, so no component has to work out its own location.
"""

import sys
from dataclasses import dataclass
from pathlib import Path


def _get_base_path() -> Path:
    """
    Get the repository root, handling PyInstaller packaging.

    When running as a PyInstaller bundle, bundled data is extracted to a
    temporary directory exposed as sys._MEIPASS. Otherwise the root is the
    parent of the `core` package.
    """
    if getattr(sys, "frozen", False):
        return Path(getattr(sys, "_MEIPASS", Path(__file__).parent))  # type: ignore[attr-defined]
    return Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class KitPaths:
    """
    Locations of the static content shipped with the kit.

    Attributes:
        repo_root: Root of the kit repository (or PyInstaller bundle).
        templates_dir: Directory holding `<type>/CLAUDE.md` templates.
        configs_dir: Directory holding `<type>-project/.claude` example configs.
        prompts_dir: Directory holding prompt markdown files.
        docs_dir: Directory holding the HTML stylesheet for doc conversion.
    """

    repo_root: Path
    templates_dir: Path
    configs_dir: Path
    prompts_dir: Path
    docs_dir: Path

    @classmethod
    def from_root(cls, root: Path) -> "KitPaths":
        root = Path(root).expanduser().resolve()
        return cls(
            repo_root=root,
            templates_dir=root / "templates",
            configs_dir=root / "configs",
            prompts_dir=root / "prompts",
            docs_dir=root / "docs",
        )

    @classmethod
    def default(cls) -> "KitPaths":
        return cls.from_root(_get_base_path())
