"""
Core modules for Epitech coding-style detection and reporting.
"""

from .spans import Span, Violation, Severity
from .offsets import line_col_of, offset_of, span_of, OffsetIndex
from .structural import StructuralChecker
from .rules import Rule, PatternRuleEngine, DEFAULT_RULES
from .reporter import ViolationReporter, scan
from .scanner import StyleScanner, FileResult
from .aggregator import FileAggregator

__all__ = [
    'Span',
    'Violation',
    'Severity',
    'line_col_of',
    'offset_of',
    'span_of',
    'OffsetIndex',
    'StructuralChecker',
    'Rule',
    'PatternRuleEngine',
    'DEFAULT_RULES',
    'ViolationReporter',
    'scan',
    'StyleScanner',
    'FileResult',
    'FileAggregator'
]
