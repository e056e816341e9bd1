# src/sanidiff_shell/core/utils/path_utils.py
import logging
import os
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package paths.
    """

    @staticmethod
    def get_shell_package_root() -> Path:
        """Returns the directory of the sanidiff_shell package (holds settings.json)."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_shell_package_root() / "settings.json"

    @staticmethod
    def get_output_path(source: Path, out_dir: Path, suffix: str, base: Optional[Path] = None) -> Path:
        """
        Returns where the sanitized copy of 'source' goes. With a 'base', the
        source's directories below it are kept so equal file names don't clash.
        Creates the target directory if it doesn't exist.
        """
        relative = source.resolve().parent.relative_to(base.resolve()) if base else Path()
        target_dir = out_dir / relative
        target_dir.mkdir(parents=True, exist_ok=True)
        return target_dir / f"{source.stem}{suffix}"

    @staticmethod
    def get_common_parent(sources: List[Path]) -> Path:
        """The deepest directory containing every source file."""
        return Path(os.path.commonpath([str(p.resolve().parent) for p in sources]))
