"""
Structural Checks Module

Line-oriented style rules that need simple state across lines and so cannot
be written as a single independent pattern: the file header, the line length
limit and comments inside function bodies.
"""

import re
import logging
from typing import List

from .spans import END_OF_LINE, Severity, Span, Violation, ViolationSet

logger = logging.getLogger(__name__)

TAB_SIZE = 8
MAX_COLUMNS = 80

HEADER_REGEX = re.compile(
    r'/\*\n'
    r'\*\* EPITECH PROJECT, [0-9]{4}\n'
    r'\*\* .*\n'
    r'\*\* File description:\n'
    r'(?:\*\* .*\n)+'
    r'\*/\n'
    r'.*'
)

# The header sentinel covers the six lines a header occupies.
HEADER_LAST_LINE = 5


class StructuralChecker:
    """
    Runs the three structural checks over a source text.

    The checks are independent and their results are concatenated in a fixed
    order: header, line length, comment inside function.
    """

    def __init__(self, tab_size: int = TAB_SIZE, max_columns: int = MAX_COLUMNS):
        """
        Initialize the checker.

        Args:
            tab_size: Number of spaces a tab counts for when measuring lines
            max_columns: Longest allowed line, in columns
        """
        self.tab_size = tab_size
        self.max_columns = max_columns

    def check(self, text: str) -> ViolationSet:
        """
        Run every structural check.

        Args:
            text: Full source text

        Returns:
            Violations ordered header, line length, comment inside function
        """
        lines = text.split('\n')
        violations = [
            *self.check_header(text),
            *self.check_line_length(lines),
            *self.check_comments_in_function(lines),
        ]
        logger.debug(f"Structural checks found {len(violations)} violations")
        return violations

    def check_header(self, text: str) -> ViolationSet:
        """Check that the text starts with the Epitech header comment."""
        if HEADER_REGEX.match(text):
            return []

        return [Violation(
            span=Span(0, 0, HEADER_LAST_LINE, END_OF_LINE),
            message="File must start with the Epitech header.",
            rule='HEADER_MISSING',
            severity=Severity.MAJOR,
        )]

    def expanded_length(self, line: str) -> int:
        """Length of a line once every tab is replaced by tab_size spaces."""
        return len(line.replace('\t', ' ' * self.tab_size))

    def check_line_length(self, lines: List[str]) -> ViolationSet:
        """Flag every line longer than max_columns after tab expansion."""
        violations = []
        for i, line in enumerate(lines):
            length = self.expanded_length(line)
            if length > self.max_columns:
                violations.append(Violation(
                    span=Span(i, 0, i, length),
                    message=f"Line can't exceed {self.max_columns} columns ({length}).",
                    rule='TOO_LONG_LINE',
                    severity=Severity.MAJOR,
                ))
        return violations

    def check_comments_in_function(self, lines: List[str]) -> ViolationSet:
        """
        Flag comment lines inside function bodies.

        A body opens on a line starting with '{' and closes on a line starting
        with '}'. Braces that are not at column 0 are ignored, so nested
        blocks are not tracked.
        """
        violations = []
        in_function = False

        for i, line in enumerate(lines):
            if line.startswith('{'):
                in_function = True
            elif line.startswith('}'):
                in_function = False

            if in_function and ('//' in line or '/*' in line):
                violations.append(Violation(
                    span=Span(i, 0, i, len(line)),
                    message="Can't have comment inside function.",
                    rule='COMMENT_IN_FUNCTION',
                    severity=Severity.MINOR,
                ))

        return violations
