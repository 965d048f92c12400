"""
Violation Reporter Module

Combines the structural checks and the pattern rules into the single ordered
list of violations handed back to the caller for rendering.
"""

import logging
from typing import Optional

from .offsets import offset_of
from .rules import PatternRuleEngine
from .spans import Violation, ViolationSet
from .structural import StructuralChecker

logger = logging.getLogger(__name__)


class ViolationReporter:
    """
    Runs a full scan of a source text.

    Structural results come first, pattern results second. Nothing is sorted,
    merged or de-duplicated: overlapping spans from different checks are all
    reported.
    """

    def __init__(self,
                 structural: Optional[StructuralChecker] = None,
                 engine: Optional[PatternRuleEngine] = None):
        self.structural = structural or StructuralChecker()
        self.engine = engine or PatternRuleEngine()

    def scan(self, text: Optional[str]) -> ViolationSet:
        """
        Scan a complete source text.

        Args:
            text: Full content of one source file

        Returns:
            Ordered list of violations, empty for empty or missing text
        """
        if not text:
            return []

        violations = [
            *self.structural.check(text),
            *self.engine.check(text),
        ]
        logger.debug(f"Scan found {len(violations)} violations")
        return violations


_default_reporter = ViolationReporter()


def scan(text: Optional[str]) -> ViolationSet:
    """Scan a source text with the default Epitech checks."""
    return _default_reporter.scan(text)


def excerpt(text: str, violation: Violation) -> str:
    """
    Get the text covered by a violation.

    Columns past the end of a line (the header sentinel, tab-expanded line
    lengths) are clamped to the line.
    """
    lines = text.split('\n')
    span = violation.span
    if span.start_line >= len(lines):
        return ''

    end_line = min(span.end_line, len(lines) - 1)
    start = offset_of(text, span.start_line, min(span.start_col, len(lines[span.start_line])))
    end = offset_of(text, end_line, min(span.end_col, len(lines[end_line])))
    return text[start:end]
