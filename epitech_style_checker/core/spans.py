"""
Span and Violation value types.

A Span is a zero-based line/column region over the scanned text. A Violation
pairs a Span with the message and name of the check that produced it.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

# Column used when a span should reach the end of its line whatever its length.
END_OF_LINE = sys.maxsize


class Severity(Enum):
    """Epitech coding-style violation levels."""
    MAJOR = "major"
    MINOR = "minor"
    INFO = "info"


@dataclass(frozen=True)
class Span:
    """Region of text expressed as start/end line and column."""
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __post_init__(self):
        if self.start_line > self.end_line:
            raise ValueError(f"Span starts after it ends: {self}")
        if self.start_line == self.end_line and self.start_col > self.end_col:
            raise ValueError(f"Span starts after it ends: {self}")

    @property
    def is_single_line(self) -> bool:
        return self.start_line == self.end_line

    def to_dict(self) -> Dict[str, int]:
        return {
            'start_line': self.start_line,
            'start_col': self.start_col,
            'end_line': self.end_line,
            'end_col': self.end_col,
        }


@dataclass(frozen=True)
class Violation:
    """A Span flagged by one check."""
    span: Span
    message: str
    rule: str
    severity: Severity = Severity.MINOR

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'rule': self.rule,
            'message': self.message,
            'severity': self.severity.value,
        }
        data.update(self.span.to_dict())
        return data

    def __str__(self):
        # Editors and compilers number lines and columns from 1
        return (f"{self.span.start_line + 1}:{self.span.start_col + 1}: "
                f"{self.severity.value}: {self.message} [{self.rule}]")


# Ordered result of one complete scan
ViolationSet = List[Violation]
