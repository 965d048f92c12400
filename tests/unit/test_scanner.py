"""
Unit tests for the style scanner module.

These tests cover:
- Extension filtering
- File and directory scanning
- File read failures
- Summary and filtering of results
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from epitech_style_checker.core.scanner import StyleScanner, FileResult, VALID_EXTENSIONS
from epitech_style_checker.core.spans import Span, Violation

HEADER = (
    "/*\n"
    "** EPITECH PROJECT, 2024\n"
    "** my_project\n"
    "** File description:\n"
    "** main file\n"
    "*/\n"
)
GOOD_CONTENT = HEADER + "int main(void)\n{\n\treturn (0);\n}\n"
BAD_CONTENT = "int main(void)\n{\n\treturn(0);  \n}\n"


class TestFileResult:
    """Test the FileResult class."""

    def test_init_without_violations(self):
        result = FileResult("test.c", "OK")

        assert result.filepath == "test.c"
        assert result.status == "OK"
        assert result.violations == []
        assert result.violation_count == 0
        assert result.error is None

    def test_rule_counts(self):
        violations = [
            Violation(Span(0, 0, 0, 1), "a", "RULE_A"),
            Violation(Span(1, 0, 1, 1), "a", "RULE_A"),
            Violation(Span(2, 0, 2, 1), "b", "RULE_B"),
        ]
        result = FileResult("test.c", "Violations", violations)

        assert result.violation_count == 3
        assert result.rule_counts() == {'RULE_A': 2, 'RULE_B': 1}

    def test_repr(self):
        repr_str = repr(FileResult("test.c", "OK"))

        assert "test.c" in repr_str
        assert "OK" in repr_str
        assert "violations=0" in repr_str


class TestStyleScanner:
    """Test the StyleScanner class."""

    def setup_method(self):
        self.scanner = StyleScanner()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def teardown_method(self):
        self.temp_dir.cleanup()

    def create_file(self, name: str, content: str) -> str:
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return str(path)

    def test_init(self):
        assert self.scanner.extensions == VALID_EXTENSIONS
        assert self.scanner.results == []

        custom = StyleScanner(extensions=['c', '.hpp'])
        assert custom.extensions == ('.c', '.hpp')

    @pytest.mark.parametrize("filename,eligible", [
        ("main.c", True),
        ("main.cpp", True),
        ("my.h", True),
        ("Makefile", False),
        ("notes.txt", False),
        ("main.c.orig", False),
    ])
    def test_is_eligible(self, filename, eligible):
        assert self.scanner.is_eligible(filename) is eligible

    def test_scan_clean_file(self):
        result = self.scanner.scan_file(self.create_file("good.c", GOOD_CONTENT))

        assert result.status == "OK"
        assert result.violations == []

    def test_scan_file_with_violations(self):
        result = self.scanner.scan_file(self.create_file("bad.c", BAD_CONTENT))

        assert result.status == "Violations"
        assert [v.rule for v in result.violations] == [
            'HEADER_MISSING', 'TRAILING_WHITESPACE', 'SPACE_AFTER_KEYWORD'
        ]
        assert result.violations[1].span == Span(2, 11, 2, 13)
        assert result.major_count == 1

    def test_non_c_file_skipped(self):
        result = self.scanner.scan_file(self.create_file("notes.txt", BAD_CONTENT))

        assert result.status == "OK"
        assert result.violations == []

    def test_missing_file(self):
        result = self.scanner.scan_file(str(self.root / "missing.c"))

        assert result.status == "Error"
        assert result.error == "File not found"

    def test_unreadable_file(self):
        path = self.create_file("locked.c", GOOD_CONTENT)

        with patch('builtins.open', side_effect=PermissionError("denied")):
            result = self.scanner.scan_file(path)

        assert result.status == "Error"
        assert "denied" in result.error

    def test_invalid_utf8_file(self):
        path = self.root / "latin1.c"
        path.write_bytes(b"int caf\xe9;\n")

        result = self.scanner.scan_file(str(path))

        assert result.status == "Error"

    def test_scan_directory_recursive(self):
        self.create_file("good.c", GOOD_CONTENT)
        self.create_file("include/bad.h", BAD_CONTENT)
        self.create_file("README.md", BAD_CONTENT)

        results = self.scanner.scan_directory(self.temp_dir.name)

        assert [Path(r.filepath).name for r in results] == ["good.c", "bad.h"]
        assert self.scanner.results == results

    def test_scan_directory_not_recursive(self):
        self.create_file("good.c", GOOD_CONTENT)
        self.create_file("include/bad.h", BAD_CONTENT)

        results = self.scanner.scan_directory(self.temp_dir.name, recursive=False)

        assert [Path(r.filepath).name for r in results] == ["good.c"]

    def test_scan_missing_directory(self):
        assert self.scanner.scan_directory(os.path.join(self.temp_dir.name, "nope")) == []

    def test_scan_path_file(self):
        path = self.create_file("bad.c", BAD_CONTENT)

        results = self.scanner.scan_path(path)

        assert len(results) == 1
        assert self.scanner.results == results

    def test_get_summary(self):
        self.create_file("good.c", GOOD_CONTENT)
        self.create_file("bad.c", BAD_CONTENT)
        self.scanner.scan_directory(self.temp_dir.name)

        summary = self.scanner.get_summary()

        assert summary['total_files'] == 2
        assert summary['ok_files'] == 1
        assert summary['failed_files'] == 1
        assert summary['total_violations'] == 3
        assert summary['rules']['HEADER_MISSING'] == 1
        assert summary['success_rate'] == 50.0

    def test_get_summary_without_results(self):
        assert self.scanner.get_summary() == {}

    def test_filter_results(self):
        self.create_file("good.c", GOOD_CONTENT)
        self.create_file("bad.c", BAD_CONTENT)
        self.scanner.scan_directory(self.temp_dir.name)

        assert len(self.scanner.filter_results(status="OK")) == 1
        assert len(self.scanner.filter_results(rule="SPACE_AFTER_KEYWORD")) == 1
        assert self.scanner.filter_results(rule="TOO_MANY_PARAMS") == []
