"""
Decides whether a path is excluded by a compiled rule set
"""

import os
from pathlib import Path
from typing import Optional

from pathspec.util import normalize_file

from .normalizer import RuleKind
from .rule_engine import MatchResult, PathLike, RuleSet
from .utils import get_logger

logger = get_logger(__name__)


def relative_query(root: Path, path: PathLike) -> Optional[str]:
    """
    Express a path relative to the rule set root

    Relative paths are joined onto an absolute root first. Both sides are
    normalized lexically so '..' segments cannot escape the root.

    Returns:
        Posix relative path ('' for the root itself), or None when the path
        is not inside root
    """
    path = Path(path)
    if not path.is_absolute() and root.is_absolute():
        path = root / path

    path = Path(os.path.normpath(path))
    root = Path(os.path.normpath(root))

    try:
        relative = path.relative_to(root)
    except ValueError:
        return None

    if not relative.parts:
        return ''
    if relative.parts[0] == '..':
        return None
    return normalize_file(relative)


def resolve(rule_set: RuleSet, path: PathLike) -> MatchResult:
    """
    Resolve a path against a rule set

    The rule appearing last in the file among all matching rules decides:
    an exclude rule excludes the path, a negated rule re-includes it.

    Args:
        rule_set: Compiled rules
        path: Path to check (absolute, or relative to the rule set root)

    Returns:
        MatchResult with the decision and the winning rule
    """
    path = Path(path)
    relative = relative_query(rule_set.root, path)
    if relative is None:
        return MatchResult(path=path, relative_path=None, excluded=False)

    matches = rule_set.matching_indices(relative)
    if not matches:
        return MatchResult(path=path, relative_path=relative, excluded=False)

    # Select by file order; the matcher's reporting order is not relied upon.
    index = max(matches)
    rule = rule_set.rules[index]

    if rule.kind is RuleKind.EXCLUDE:
        excluded = True
    elif rule.kind is RuleKind.INCLUDE:
        excluded = False
    else:
        raise AssertionError(f"Unhandled rule kind: {rule.kind!r}")

    logger.trace("%s: rule %d (%s) -> excluded=%s", relative, index, rule, excluded)
    return MatchResult(
        path=path,
        relative_path=relative,
        excluded=excluded,
        rule=rule,
        index=index,
        matched_indices=matches,
    )


def is_excluded(rule_set: RuleSet, path: PathLike) -> bool:
    """Check if a path is excluded by the rule set"""
    return resolve(rule_set, path).excluded
