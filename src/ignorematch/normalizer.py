"""
Turns raw ignore-file lines into structured rules
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class RuleKind(Enum):
    EXCLUDE = "exclude"
    INCLUDE = "include"  # negated ("!pattern") whitelist rule


@dataclass(frozen=True)
class Rule:
    """One parsed line of an ignore file"""
    text: str
    kind: RuleKind = RuleKind.EXCLUDE
    anchored: bool = False
    source: str = ""
    line: int = 0  # 1-based, 0 when not read from a file

    @property
    def is_negated(self) -> bool:
        return self.kind is RuleKind.INCLUDE

    def __str__(self) -> str:
        return self.source or self.text


def is_rule_line(line: str) -> bool:
    """Blank lines and lines starting with '#' carry no rule"""
    return bool(line) and not line.startswith('#')


def normalize(line: str, line_number: int = 0) -> Rule:
    """
    Normalize one rule line

    Steps run in a fixed order: negation, anchoring, trailing slash, then
    un-escaping of a leading '\\#' or '\\!'.

    Args:
        line: A non-empty, non-comment line
        line_number: Position of the line in its source file

    Returns:
        Rule with the cleaned pattern text
    """
    text = line

    if text.startswith('!'):
        text = text[1:]
        kind = RuleKind.INCLUDE
    else:
        kind = RuleKind.EXCLUDE

    anchored = text.startswith('/')
    if anchored:
        text = text[1:]

    if text.endswith('/'):
        text = text[:-1]

    if text.startswith('\\#') or text.startswith('\\!'):
        text = text[1:]

    return Rule(text=text, kind=kind, anchored=anchored, source=line, line=line_number)


def parse_lines(lines: Iterable[str]) -> List[Rule]:
    """
    Parse the lines of an ignore file, in order

    Args:
        lines: Raw lines, with or without line terminators

    Returns:
        Rules for every line that is neither blank nor a comment
    """
    rules = []
    for line_number, raw in enumerate(lines, 1):
        line = raw.rstrip('\r\n')
        if not is_rule_line(line):
            continue
        rules.append(normalize(line, line_number))
    return rules
