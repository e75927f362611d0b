"""
Finds the ignore file governing a directory
"""

from pathlib import Path
from typing import Optional, Union

from .config import IgnoreConfig
from .utils import get_logger

logger = get_logger(__name__)


def locate(start: Union[str, Path], config: Optional[IgnoreConfig] = None) -> Optional[Path]:
    """
    Walk upward from a directory looking for an ignore file

    The scan stops at the first directory holding an ignore file, at a
    repository root marker, or at the filesystem root.

    Args:
        start: Directory to start from
        config: Filenames to look for (defaults to IgnoreConfig.from_env())

    Returns:
        Path to the ignore file, or None
    """
    config = config or IgnoreConfig.from_env()
    current = Path(start).absolute()

    while True:
        candidate = current / config.ignore_filename
        if candidate.is_file():
            logger.debug(f"Found {config.ignore_filename} for {start}: {candidate}")
            return candidate

        if (current / config.repo_marker).is_dir():
            logger.debug(f"Reached repository root {current} without {config.ignore_filename}")
            return None

        parent = current.parent
        if parent == current:
            logger.debug(f"No {config.ignore_filename} found above {start}")
            return None
        current = parent
