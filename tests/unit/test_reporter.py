"""
Unit tests for the violation reporter.
"""

import time

from epitech_style_checker import scan
from epitech_style_checker.core.reporter import ViolationReporter, excerpt
from epitech_style_checker.core.rules import PatternRuleEngine
from epitech_style_checker.core.spans import Span
from epitech_style_checker.core.structural import StructuralChecker

HEADER = (
    "/*\n"
    "** EPITECH PROJECT, 2024\n"
    "** my_project\n"
    "** File description:\n"
    "** main file\n"
    "*/\n"
)


class TestViolationReporter:
    """Test the full scan."""

    def test_empty_text(self):
        assert scan("") == []

    def test_missing_text(self):
        assert scan(None) == []

    def test_clean_file(self):
        assert scan(HEADER + "int main(void)\n{\n\treturn (0);\n}\n") == []

    def test_structural_results_first(self):
        violations = scan("int a;  \n")
        assert [v.rule for v in violations] == ['HEADER_MISSING', 'TRAILING_WHITESPACE']

    def test_overlapping_violations_all_reported(self):
        violations = scan(HEADER + "int a;" + " " * 80 + "\n")

        assert [v.rule for v in violations] == ['TOO_LONG_LINE', 'TRAILING_WHITESPACE']
        assert violations[0].span.start_line == violations[1].span.start_line == 6

    def test_idempotent(self):
        text = "int f(int a, int b, int c, int d, int e)\n{\n\t// x\n\tif(a)  \n}\n"
        assert scan(text) == scan(text)

    def test_custom_checks(self):
        reporter = ViolationReporter(
            structural=StructuralChecker(max_columns=10),
            engine=PatternRuleEngine(rules=[])
        )

        violations = reporter.scan("x" * 11)

        assert [v.rule for v in violations] == ['HEADER_MISSING', 'TOO_LONG_LINE']

    def test_reporter_reusable(self):
        reporter = ViolationReporter()

        first = reporter.scan("if(a)\n")
        reporter.scan(HEADER)
        assert reporter.scan("if(a)\n") == first

    def test_large_file_scans_quickly(self):
        text = "int a;  \n" * 20000

        started = time.perf_counter()
        violations = scan(text)
        elapsed = time.perf_counter() - started

        assert len(violations) == 20001
        assert violations[-1].span == Span(19999, 6, 19999, 8)
        assert elapsed < 5.0


class TestExcerpt:
    """Test extraction of the text covered by a violation."""

    def test_single_line(self):
        text = "int a;  \n"
        violation = scan(text)[1]

        assert excerpt(text, violation) == "  "

    def test_header_sentinel_is_clamped(self):
        text = "int a;\n"
        violation = scan(text)[0]

        assert excerpt(text, violation) == "int a;\n"

    def test_expanded_line_length_is_clamped(self):
        line = "\t" * 10 + "a"
        violation = scan(HEADER + line + "\n")[0]

        assert violation.rule == 'TOO_LONG_LINE'
        assert excerpt(HEADER + line + "\n", violation) == line
