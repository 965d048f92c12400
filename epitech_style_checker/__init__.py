"""
Epitech-Style-Checker

A coding-style checker for C/C++ sources following the Epitech style guide.
"""

__version__ = "1.0.0"

from .core.reporter import ViolationReporter, scan
from .core.scanner import StyleScanner
from .core.aggregator import FileAggregator

__all__ = [
    'ViolationReporter',
    'StyleScanner',
    'FileAggregator',
    'scan'
]
