"""
Settings for locating and loading ignore files.

Defaults come from :mod:`ignorematch.constants`; every field can be
overridden through an environment variable via :meth:`IgnoreConfig.from_env`.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import (
    IGNORE_FILENAME,
    REPO_MARKER,
    MAX_IGNORE_FILE_SIZE,
    MAX_PATTERNS_PER_FILE,
    ENV_IGNORE_FILENAME,
    ENV_REPO_MARKER,
    ENV_MAX_FILE_SIZE,
    ENV_MAX_PATTERNS,
)
from .utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IgnoreConfig:
    """Configuration for the locator and the file loader"""
    ignore_filename: str = IGNORE_FILENAME
    repo_marker: str = REPO_MARKER
    max_file_size: int = MAX_IGNORE_FILE_SIZE
    max_patterns: int = MAX_PATTERNS_PER_FILE

    def __post_init__(self):
        """Validate configuration"""
        for field_name in ('ignore_filename', 'repo_marker'):
            value = getattr(self, field_name)
            if not value:
                raise ValueError(f"{field_name} must not be empty")
            if '/' in value or (os.sep != '/' and os.sep in value):
                raise ValueError(f"{field_name} must be a bare name, got {value!r}")
        if self.max_file_size <= 0:
            raise ValueError(f"max_file_size must be positive, got {self.max_file_size}")
        if self.max_patterns <= 0:
            raise ValueError(f"max_patterns must be positive, got {self.max_patterns}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "IgnoreConfig":
        """
        Build a configuration with environment variable overrides

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            IgnoreConfig with overrides applied
        """
        env = os.environ if environ is None else environ

        config = cls(
            ignore_filename=env.get(ENV_IGNORE_FILENAME) or IGNORE_FILENAME,
            repo_marker=env.get(ENV_REPO_MARKER) or REPO_MARKER,
            max_file_size=_int_from_env(env, ENV_MAX_FILE_SIZE, MAX_IGNORE_FILE_SIZE),
            max_patterns=_int_from_env(env, ENV_MAX_PATTERNS, MAX_PATTERNS_PER_FILE),
        )
        logger.debug(f"Loaded ignore configuration: {config}")
        return config


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
