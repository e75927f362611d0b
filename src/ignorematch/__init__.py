"""
Ignore-file rule matching for ignorematch

This package decides whether a path is excluded by the rules of an ignore
file:
- Line normalization (comments, '!' negation, '/' anchoring, escapes)
- Compilation of all rules into one combined pathspec matcher
- "Last matching rule wins" resolution with whitelist rules
- Upward discovery of the ignore file governing a directory
"""

from .config import IgnoreConfig
from .constants import IGNORE_FILENAME, REPO_MARKER
from .errors import (
    IgnoreError,
    IgnoreFileError,
    IgnoreFileReadError,
    IgnoreFileTooLargeError,
    PatternCompileError,
    RuleSetBuildError,
)
from .normalizer import Rule, RuleKind, normalize, parse_lines
from .rule_engine import IgnoreRuleEngine, MatchResult, RuleSet, compile_rules, derive_expression
from .resolver import is_excluded, resolve
from .locator import locate
from .file_loader import IgnoreFileInfo, load_file, load_from_lines, load_rule_set, locate_and_load

__version__ = "0.1.0"

__all__ = [
    'IGNORE_FILENAME',
    'REPO_MARKER',
    'IgnoreConfig',
    'IgnoreError',
    'IgnoreFileError',
    'IgnoreFileReadError',
    'IgnoreFileTooLargeError',
    'PatternCompileError',
    'RuleSetBuildError',
    'Rule',
    'RuleKind',
    'normalize',
    'parse_lines',
    'IgnoreRuleEngine',
    'MatchResult',
    'RuleSet',
    'compile_rules',
    'derive_expression',
    'is_excluded',
    'resolve',
    'locate',
    'IgnoreFileInfo',
    'load_file',
    'load_from_lines',
    'load_rule_set',
    'locate_and_load',
]
