"""
Pattern Rule Engine Module

This module holds the ordered pattern rules of the Epitech coding style and
the engine that reports every non-overlapping match of each rule.

Matches are found leftmost-first and each search resumes at the end of the
previous match, so a rule never matches the same region twice.
"""

import re
import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .offsets import OffsetIndex
from .spans import Severity, Violation, ViolationSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """A single style-violation pattern and the message reported for it."""
    name: str
    pattern: re.Pattern
    message: str
    severity: Severity = Severity.MINOR

    @classmethod
    def compile(cls, name: str, pattern: str, message: str,
                severity: Severity = Severity.MINOR, flags: int = 0) -> 'Rule':
        """Build a rule from a regular expression string."""
        return cls(name, re.compile(pattern, flags), message, severity)


DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule.compile(
        'TRAILING_WHITESPACE',
        r'(?:\t| )+$',
        "Line can't end with tabs or spaces.",
        flags=re.MULTILINE,
    ),
    Rule.compile(
        'SPACE_BEFORE_TAB',
        r' +\t+',
        "Can't have multiple tabs or spaces.",
    ),
    # Requires '{' where the comment token must start, so this rule cannot
    # match. StructuralChecker is what reports comments in function bodies.
    Rule.compile(
        'COMMENT_IN_FUNCTION',
        r'(?=\{(?:.*|.*\n)*)(?://|/\*).*',
        "Can't have comment inside function.",
    ),
    Rule.compile(
        'TAB_BEFORE_SPACE',
        r'\t+ +',
        "Can't have multiple tabs or spaces.",
    ),
    # Opening brace, rest of its line, 21+ interior lines, closing brace at
    # column 0. The first column-0 '}' ends the block.
    Rule.compile(
        'FUNCTION_TOO_LONG',
        r'\{[^\n]*\n(?:(?!\})[^\n]*\n){21,}\}',
        "Function can't exceed 20 lines.",
        severity=Severity.MAJOR,
    ),
    Rule.compile(
        'SPACE_AFTER_KEYWORD',
        r'(?:return|if|else if|else|while|for)(?=\(|  +|\t)',
        "Must have space after keyword.",
    ),
    Rule.compile(
        'TOO_MANY_PARAMS',
        r'\((?:[^(),]*,){4,}[^()]*\)[ \t\n]+(?=\{)',
        "Can't have more than 4 parameters to function.",
        severity=Severity.MAJOR,
    ),
)


class PatternRuleEngine:
    """
    Applies an ordered collection of rules to a whole source text.

    The engine keeps nothing between scans; the same instance can be reused
    for any number of texts.
    """

    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES):
        """
        Initialize the engine.

        Args:
            rules: Rules to apply, in scan order
        """
        self.rules: Tuple[Rule, ...] = tuple(rules)

    def find_matches(self, rule: Rule, text: str) -> Iterator[Tuple[int, int]]:
        """
        Yield the (start, end) offsets of every non-overlapping match of a rule.

        Args:
            rule: Rule to apply
            text: Full source text

        Yields:
            Offsets of each match, earliest first
        """
        for match in rule.pattern.finditer(text):
            yield match.span()

    def check_rule(self, rule: Rule, text: str) -> ViolationSet:
        """Report every match of one rule as a Violation."""
        index = OffsetIndex(text)
        return [
            Violation(
                span=index.span(start, end),
                message=rule.message,
                rule=rule.name,
                severity=rule.severity,
            )
            for start, end in self.find_matches(rule, text)
        ]

    def check(self, text: str) -> ViolationSet:
        """
        Apply every rule in declaration order.

        Args:
            text: Full source text

        Returns:
            Violations grouped by rule, in rule order
        """
        violations: List[Violation] = []
        for rule in self.rules:
            found = self.check_rule(rule, text)
            if found:
                logger.debug(f"Rule {rule.name} matched {len(found)} times")
            violations.extend(found)
        return violations
