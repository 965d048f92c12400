"""
Style Scanner Module

This module provides functionality to scan C/C++ files and directories with
the Epitech style checks and capture the violations found in each file.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .reporter import ViolationReporter
from .spans import Severity, Violation, ViolationSet

logger = logging.getLogger(__name__)

VALID_EXTENSIONS = ('.c', '.cpp', '.h')


class FileResult:
    """Represents the result of a style scan on a single file."""

    def __init__(self, filepath: str, status: str, violations: List[Violation] = None,
                 error: Optional[str] = None):
        self.filepath = filepath
        self.status = status  # 'OK', 'Error' or 'Violations'
        self.violations = violations or []
        self.violation_count = len(self.violations)
        self.error = error

    @property
    def major_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.MAJOR)

    def rule_counts(self) -> Dict[str, int]:
        """Count violations per rule name."""
        counts: Dict[str, int] = {}
        for violation in self.violations:
            counts[violation.rule] = counts.get(violation.rule, 0) + 1
        return counts

    def __repr__(self):
        return (f"FileResult(filepath='{self.filepath}', status='{self.status}', "
                f"violations={self.violation_count})")


class StyleScanner:
    """
    Scanner class for running the Epitech checks on source files.

    This class provides methods to:
    - Scan raw text, individual files or entire directories
    - Skip files whose extension is not a C/C++ one
    - Filter results by status or rule
    - Generate summary statistics
    """

    def __init__(self, extensions: Iterable[str] = VALID_EXTENSIONS,
                 reporter: Optional[ViolationReporter] = None):
        """
        Initialize the scanner.

        Args:
            extensions: File extensions eligible for scanning
            reporter: Reporter running the checks, default Epitech checks if None
        """
        self.extensions = tuple(ext if ext.startswith('.') else f'.{ext}' for ext in extensions)
        self.reporter = reporter or ViolationReporter()
        self.results: List[FileResult] = []

    def is_eligible(self, filepath: str) -> bool:
        """Check whether a file should be scanned, based on its extension."""
        return Path(filepath).suffix in self.extensions

    def scan_text(self, text: str) -> ViolationSet:
        """Scan source text that is already loaded."""
        return self.reporter.scan(text)

    def _read_file(self, filepath: str) -> str:
        with open(filepath, 'r', encoding='utf-8') as f:
            return f.read()

    def scan_file(self, filepath: str) -> FileResult:
        """
        Scan a single source file.

        Args:
            filepath: Path to the file

        Returns:
            FileResult object
        """
        if not self.is_eligible(filepath):
            logger.warning(f"Skipping non-C file: {filepath}")
            return FileResult(filepath, "OK")

        try:
            content = self._read_file(filepath)
        except FileNotFoundError:
            logger.error(f"File not found: {filepath}")
            return FileResult(filepath, "Error", error="File not found")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read file {filepath}: {e}")
            return FileResult(filepath, "Error", error=str(e))

        violations = self.scan_text(content)
        status = "Violations" if violations else "OK"
        logger.debug(f"{filepath}: {len(violations)} violations")
        return FileResult(filepath, status, violations)

    def scan_directory(self, directory: str, recursive: bool = True) -> List[FileResult]:
        """
        Scan all eligible files in a directory.

        Args:
            directory: Path to the directory
            recursive: Whether to scan subdirectories

        Returns:
            List of FileResult objects, ordered by path
        """
        results = []
        path = Path(directory)

        if not path.is_dir():
            logger.error(f"Directory not found: {directory}")
            return results

        pattern = "**/*" if recursive else "*"
        files = sorted(p for p in path.glob(pattern) if p.is_file() and p.suffix in self.extensions)

        logger.info(f"Found {len(files)} C/C++ files to scan")

        for file_path in files:
            results.append(self.scan_file(str(file_path)))

        self.results = results
        return results

    def scan_path(self, path: str, recursive: bool = True) -> List[FileResult]:
        """Scan a file or a directory."""
        if Path(path).is_dir():
            return self.scan_directory(path, recursive=recursive)
        result = self.scan_file(path)
        self.results = [result]
        return self.results

    def get_summary(self) -> Dict:
        """
        Get summary statistics of scan results.

        Returns:
            Dictionary with summary statistics
        """
        if not self.results:
            return {}

        total_files = len(self.results)
        ok_files = len([r for r in self.results if r.status == "OK"])
        total_violations = sum(r.violation_count for r in self.results)

        rules: Dict[str, int] = {}
        for result in self.results:
            for rule, count in result.rule_counts().items():
                rules[rule] = rules.get(rule, 0) + count

        return {
            'total_files': total_files,
            'ok_files': ok_files,
            'failed_files': total_files - ok_files,
            'total_violations': total_violations,
            'rules': rules,
            'success_rate': (ok_files / total_files * 100) if total_files > 0 else 0
        }

    def filter_results(self, status: Optional[str] = None, rule: Optional[str] = None) -> List[FileResult]:
        """
        Filter scan results by status or rule.

        Args:
            status: Filter by status ('OK', 'Violations' or 'Error')
            rule: Filter by rule name

        Returns:
            Filtered list of FileResult objects
        """
        filtered = self.results

        if status:
            filtered = [r for r in filtered if r.status == status]

        if rule:
            filtered = [r for r in filtered if any(v.rule == rule for v in r.violations)]

        return filtered
