"""
File loader for reading ignore files and building rule sets
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .config import IgnoreConfig
from .errors import IgnoreError, IgnoreFileReadError, IgnoreFileTooLargeError
from .locator import locate
from .normalizer import parse_lines
from .rule_engine import IgnoreRuleEngine, RuleSet
from .utils import get_logger, log_with_context

logger = get_logger(__name__)


@dataclass
class IgnoreFileInfo:
    """Information about a loaded ignore file"""
    path: Path
    rule_set: RuleSet
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def root(self) -> Path:
        return self.rule_set.root

    @property
    def patterns(self) -> List[str]:
        """Raw rule lines, in file order"""
        return [rule.source for rule in self.rule_set.rules]


def load_from_lines(lines: Iterable[str], root: Union[str, Path],
                    source: Optional[Union[str, Path]] = None) -> RuleSet:
    """
    Build a rule set from pattern text already in memory

    Args:
        lines: Lines of an ignore file, in order
        root: Directory the patterns are relative to
        source: Ignore file the lines came from, if any

    Returns:
        Compiled RuleSet

    Raises:
        PatternCompileError: a pattern is invalid
        RuleSetBuildError: the combined matcher could not be built
    """
    rules = parse_lines(lines)
    return IgnoreRuleEngine().compile_rules(rules, root, source)


def read_lines(file_path: Path, config: IgnoreConfig) -> List[str]:
    """
    Read an ignore file as a list of lines

    Raises:
        IgnoreFileReadError: the file cannot be read or is not valid UTF-8
        IgnoreFileTooLargeError: the file exceeds config.max_file_size
    """
    try:
        file_size = file_path.stat().st_size
    except OSError as e:
        raise IgnoreFileReadError(file_path, str(e)) from e

    if file_size > config.max_file_size:
        raise IgnoreFileTooLargeError(
            file_path, f"{file_size} bytes, max {config.max_file_size}"
        )

    try:
        with open(file_path, 'r', encoding='utf-8-sig', newline='') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreFileReadError(file_path, str(e)) from e

    lines = content.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


def load_file(file_path: Union[str, Path], config: Optional[IgnoreConfig] = None) -> IgnoreFileInfo:
    """
    Load and compile an ignore file

    The rule set root is the directory containing the file.

    Args:
        file_path: Path to the ignore file
        config: Limits to apply (defaults to IgnoreConfig.from_env())

    Returns:
        IgnoreFileInfo with the compiled rules and line statistics
    """
    config = config or IgnoreConfig.from_env()
    file_path = Path(file_path)

    lines = read_lines(file_path, config)
    stats = {
        'total_lines': len(lines),
        'empty_lines': 0,
        'comment_lines': 0,
        'pattern_lines': 0,
    }
    for line in lines:
        line = line.rstrip('\r')
        if not line:
            stats['empty_lines'] += 1
        elif line.startswith('#'):
            stats['comment_lines'] += 1
        else:
            stats['pattern_lines'] += 1

    if stats['pattern_lines'] > config.max_patterns:
        raise IgnoreFileTooLargeError(
            file_path, f"{stats['pattern_lines']} patterns, max {config.max_patterns}"
        )

    rule_set = load_from_lines(lines, file_path.parent, source=file_path)
    log_with_context(
        logger, logging.INFO, f"Loaded {len(rule_set)} rules from {file_path}",
        rules=len(rule_set), root=str(rule_set.root),
    )
    return IgnoreFileInfo(path=file_path, rule_set=rule_set, stats=stats)


def load_rule_set(file_path: Union[str, Path], config: Optional[IgnoreConfig] = None) -> RuleSet:
    """Load an ignore file and return only its rule set"""
    return load_file(file_path, config).rule_set


def locate_and_load(start_dir: Union[str, Path],
                    config: Optional[IgnoreConfig] = None) -> Optional[RuleSet]:
    """
    Find the ignore file governing a directory and compile it

    Args:
        start_dir: Directory to start the upward scan from
        config: Filenames and limits (defaults to IgnoreConfig.from_env())

    Returns:
        RuleSet, or None if no ignore file governs start_dir or it failed to load
    """
    config = config or IgnoreConfig.from_env()
    file_path = locate(start_dir, config)
    if file_path is None:
        return None

    try:
        return load_rule_set(file_path, config)
    except IgnoreError as e:
        logger.warning(f"Ignoring unusable {config.ignore_filename} at {file_path}: {e}")
        return None
