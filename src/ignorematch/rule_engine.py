"""
Rule engine for pattern compilation and matching
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

import pathspec
from pathspec.patterns import GitWildMatchPattern
from pathspec.patterns.gitwildmatch import GitWildMatchPatternError

from .constants import RECURSIVE_PREFIX, RECURSIVE_SUFFIX
from .errors import PatternCompileError, RuleSetBuildError
from .normalizer import Rule
from .utils import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class MatchResult:
    """Result of matching a path against a rule set"""
    path: Path
    relative_path: Optional[str]  # None when the path lies outside the root
    excluded: bool
    rule: Optional[Rule] = None
    index: Optional[int] = None
    matched_indices: Tuple[int, ...] = ()

    @property
    def matched(self) -> bool:
        return self.rule is not None


@dataclass(frozen=True, eq=False)
class RuleSet:
    """
    Compiled, immutable rules of one ignore file.

    ``rules``, ``expressions`` and ``spec.patterns`` share one index space:
    position i in each refers to line-ordered rule i.
    """
    rules: Tuple[Rule, ...]
    expressions: Tuple[str, ...]
    spec: pathspec.PathSpec
    root: Path
    source: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def matching_indices(self, relative_path: str) -> Tuple[int, ...]:
        """
        Indices of every rule whose expression matches a root-relative path

        Args:
            relative_path: Posix path relative to root ('' for root itself)

        Returns:
            Matching indices in ascending order
        """
        if not relative_path:
            return ()
        # A trailing separator lets the '/**' suffix match the entry itself.
        query = relative_path.rstrip('/') + '/'
        return tuple(
            index for index, pattern in enumerate(self.spec.patterns)
            if pattern.match_file(query) is not None
        )

    def match(self, path: PathLike) -> MatchResult:
        # Import here to avoid circular dependency
        from .resolver import resolve
        return resolve(self, path)

    def is_excluded(self, path: PathLike) -> bool:
        from .resolver import is_excluded
        return is_excluded(self, path)

    def matching_rules(self, path: PathLike) -> Tuple[Rule, ...]:
        """All rules matching a path, in file order"""
        result = self.match(path)
        return tuple(self.rules[i] for i in result.matched_indices)


def derive_expression(rule: Rule) -> str:
    """
    Wildcard expression a rule is compiled from

    Unanchored rules get a recursive prefix so they match at any depth; every
    rule gets a recursive suffix so it also covers everything beneath a
    matching directory.
    """
    expression = rule.text
    if not rule.anchored and not expression.startswith(RECURSIVE_PREFIX):
        expression = RECURSIVE_PREFIX + expression
    if not expression.endswith(RECURSIVE_SUFFIX):
        expression = expression + RECURSIVE_SUFFIX
    return expression


class IgnoreRuleEngine:
    """
    Compiles normalized rules into a RuleSet
    """

    def compile_rules(self, rules: Sequence[Rule], root: PathLike,
                      source: Optional[PathLike] = None) -> RuleSet:
        """
        Compile rules into one combined matcher

        Args:
            rules: Rules in file order
            root: Directory the rules are evaluated against
            source: Ignore file the rules were read from, if any

        Returns:
            RuleSet preserving the order of ``rules``

        Raises:
            PatternCompileError: a rule's expression is invalid
            RuleSetBuildError: the combined matcher could not be built
        """
        rules = tuple(rules)
        expressions = tuple(derive_expression(rule) for rule in rules)

        patterns = [
            self._compile_expression(rule, expression)
            for rule, expression in zip(rules, expressions)
        ]

        try:
            spec = pathspec.PathSpec(patterns)
        except Exception as e:
            raise RuleSetBuildError(f"Failed to build matcher for {len(patterns)} patterns: {e}") from e

        rule_set = RuleSet(
            rules=rules,
            expressions=expressions,
            spec=spec,
            root=Path(root),
            source=Path(source) if source is not None else None,
        )
        logger.debug(f"Compiled {len(rules)} rules for {rule_set.root}")
        return rule_set

    def validate_pattern(self, rule: Rule) -> Tuple[bool, Optional[str]]:
        """
        Validate a single rule

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            self._compile_expression(rule, derive_expression(rule))
            return True, None
        except PatternCompileError as e:
            return False, e.detail

    @staticmethod
    def _compile_expression(rule: Rule, expression: str) -> GitWildMatchPattern:
        # A leading '/' keeps pathspec from reading '!', '#' or whitespace at
        # the start of an anchored expression as syntax.
        pathspec_pattern = '/' + expression if rule.anchored else expression
        try:
            pattern = GitWildMatchPattern(pathspec_pattern)
        except (GitWildMatchPatternError, re.error) as e:
            raise PatternCompileError(
                pattern=rule.source or rule.text,
                expression=expression,
                detail=str(e),
                line=rule.line or None,
            ) from e
        logger.trace("Compiled rule %s as %s", rule, expression)
        return pattern


def compile_rules(rules: Iterable[Rule], root: PathLike,
                  source: Optional[PathLike] = None) -> RuleSet:
    """Compile rules with a default engine"""
    return IgnoreRuleEngine().compile_rules(list(rules), root, source)
