"""
Exceptions raised while loading and compiling ignore rules.

Matching never raises; only construction does.
"""

from pathlib import Path
from typing import Optional


class IgnoreError(Exception):
    """Base class for every error raised by ignorematch."""


class IgnoreFileError(IgnoreError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class IgnoreFileReadError(IgnoreFileError):
    """The ignore file could not be read or decoded."""

    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot read ignore file ({detail})")


class IgnoreFileTooLargeError(IgnoreFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Ignore file exceeds limits ({detail})")


class PatternCompileError(IgnoreError):
    """A rule's derived wildcard expression is not a valid pattern."""

    def __init__(
        self,
        pattern: str,
        expression: str,
        detail: str,
        line: Optional[int] = None,
    ) -> None:
        self.pattern = pattern
        self.expression = expression
        self.detail = detail
        self.line = line
        location = f"line {line}: " if line else ""
        super().__init__(
            f"{location}invalid pattern {pattern!r} (compiled as {expression!r}): {detail}"
        )


class RuleSetBuildError(IgnoreError):
    """The combined matcher could not be built from the compiled patterns."""
