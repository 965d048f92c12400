"""
File Aggregator Module

This module provides functionality to aggregate and organize style scan results,
including file status categorization, filtering, and report generation.
"""

from typing import List, Dict, Optional, Set, Tuple, Any
from dataclasses import dataclass
from enum import Enum
import fnmatch
import logging
from pathlib import Path
from .scanner import FileResult
from .spans import Severity

logger = logging.getLogger(__name__)


class FileStatus(Enum):
    """File status categories."""
    OK = "OK"
    MINOR = "Minor"
    MAJOR = "Major"
    ERROR = "Error"


@dataclass
class FileInfo:
    """Information about a single file."""
    filepath: str
    filename: str
    status: FileStatus
    violation_count: int
    major_violations: int
    minor_violations: int
    info_violations: int
    rules: Set[str]
    rule_counts: Dict[str, int]
    lines: int
    error: Optional[str] = None


@dataclass
class ProjectSummary:
    """Summary statistics for the entire project."""
    total_files: int
    ok_files: int
    minor_files: int
    major_files: int
    error_files: int
    total_violations: int
    total_lines: int
    success_rate: float
    most_common_violations: List[Tuple[str, int]]
    rule_distribution: Dict[str, int]
    severity_distribution: Dict[str, int]


class FileAggregator:
    """
    Aggregator for organizing and analyzing style scan results.

    This class provides:
    - File status categorization and organization
    - Filtering and search capabilities
    - Statistical analysis and reporting
    - Project-wide recommendations
    """

    def __init__(self):
        """Initialize the file aggregator."""
        self.files: List[FileInfo] = []
        self.scan_results: Dict[str, FileResult] = {}

    def add_scan_result(self, result: FileResult, content: Optional[str] = None):
        """
        Add a scan result to the aggregator.

        Args:
            result: FileResult from scanner
            content: File text, read from disk when omitted
        """
        self.scan_results[result.filepath] = result
        file_info = self._create_file_info(result, content)

        for i, existing_file in enumerate(self.files):
            if existing_file.filepath == result.filepath:
                self.files[i] = file_info
                break
        else:
            self.files.append(file_info)

    def _create_file_info(self, result: FileResult, content: Optional[str]) -> FileInfo:
        """Create FileInfo from a scan result."""
        severities = [v.severity for v in result.violations]
        major = severities.count(Severity.MAJOR)

        if result.status == "Error":
            status = FileStatus.ERROR
        elif not result.violations:
            status = FileStatus.OK
        elif major > 0:
            status = FileStatus.MAJOR
        else:
            status = FileStatus.MINOR

        rule_counts = result.rule_counts()

        return FileInfo(
            filepath=result.filepath,
            filename=Path(result.filepath).name,
            status=status,
            violation_count=result.violation_count,
            major_violations=major,
            minor_violations=severities.count(Severity.MINOR),
            info_violations=severities.count(Severity.INFO),
            rules=set(rule_counts),
            rule_counts=rule_counts,
            lines=self._count_lines(result.filepath, content),
            error=result.error,
        )

    def _count_lines(self, filepath: str, content: Optional[str]) -> int:
        """Count the lines of a file."""
        if content is None:
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to count lines in {filepath}: {e}")
                return 0

        return len(content.splitlines())

    def filter_files(self,
                     status: Optional[FileStatus] = None,
                     rule: Optional[str] = None,
                     min_violations: Optional[int] = None,
                     max_violations: Optional[int] = None,
                     filename_pattern: Optional[str] = None) -> List[FileInfo]:
        """
        Filter files based on various criteria.

        Args:
            status: Filter by file status
            rule: Filter by rule name
            min_violations: Minimum number of violations
            max_violations: Maximum number of violations
            filename_pattern: Glob pattern matched against the filename

        Returns:
            List of filtered FileInfo objects
        """
        filtered = self.files

        if status:
            filtered = [f for f in filtered if f.status == status]

        if rule:
            filtered = [f for f in filtered if rule in f.rules]

        if min_violations is not None:
            filtered = [f for f in filtered if f.violation_count >= min_violations]

        if max_violations is not None:
            filtered = [f for f in filtered if f.violation_count <= max_violations]

        if filename_pattern:
            filtered = [f for f in filtered if fnmatch.fnmatch(f.filename.lower(), filename_pattern.lower())]

        return filtered

    def get_files_by_status(self) -> Dict[FileStatus, List[FileInfo]]:
        """Group files by their status."""
        groups = {status: [] for status in FileStatus}

        for file_info in self.files:
            groups[file_info.status].append(file_info)

        return groups

    def get_files_by_rule(self) -> Dict[str, List[FileInfo]]:
        """Group files by the rules they violate."""
        groups: Dict[str, List[FileInfo]] = {}

        for file_info in self.files:
            for rule in sorted(file_info.rules):
                groups.setdefault(rule, []).append(file_info)

        return groups

    def get_most_problematic_files(self, limit: int = 10) -> List[FileInfo]:
        """
        Get the most problematic files, major violations weighing most.

        Args:
            limit: Maximum number of files to return

        Returns:
            List of FileInfo objects, worst first
        """
        def problem_score(file_info: FileInfo) -> float:
            score = file_info.major_violations * 5 + file_info.minor_violations * 2 + file_info.info_violations
            if file_info.lines > 0:
                score += file_info.violation_count / file_info.lines * 50
            return score

        candidates = [f for f in self.files if f.violation_count > 0]
        return sorted(candidates, key=problem_score, reverse=True)[:limit]

    def generate_project_summary(self) -> ProjectSummary:
        """Generate comprehensive project summary."""
        if not self.files:
            return ProjectSummary(
                total_files=0, ok_files=0, minor_files=0, major_files=0,
                error_files=0, total_violations=0, total_lines=0,
                success_rate=0.0, most_common_violations=[],
                rule_distribution={}, severity_distribution={}
            )

        total_files = len(self.files)
        status_counts = {status: 0 for status in FileStatus}
        for file_info in self.files:
            status_counts[file_info.status] += 1

        rule_distribution: Dict[str, int] = {}
        for file_info in self.files:
            for rule, count in file_info.rule_counts.items():
                rule_distribution[rule] = rule_distribution.get(rule, 0) + count

        most_common = sorted(rule_distribution.items(), key=lambda x: x[1], reverse=True)[:10]

        return ProjectSummary(
            total_files=total_files,
            ok_files=status_counts[FileStatus.OK],
            minor_files=status_counts[FileStatus.MINOR],
            major_files=status_counts[FileStatus.MAJOR],
            error_files=status_counts[FileStatus.ERROR],
            total_violations=sum(f.violation_count for f in self.files),
            total_lines=sum(f.lines for f in self.files),
            success_rate=status_counts[FileStatus.OK] / total_files * 100,
            most_common_violations=most_common,
            rule_distribution=rule_distribution,
            severity_distribution={
                'major': sum(f.major_violations for f in self.files),
                'minor': sum(f.minor_violations for f in self.files),
                'info': sum(f.info_violations for f in self.files),
            }
        )

    def get_recommendations(self) -> List[str]:
        """Generate recommendations based on project analysis."""
        recommendations = []
        summary = self.generate_project_summary()

        if summary.total_files == 0:
            return recommendations

        if summary.success_rate < 50:
            recommendations.append("🚨 Less than half of the files follow the coding style.")
        elif summary.success_rate < 80:
            recommendations.append("⚠️ Project needs improvement. Start with the files with the most violations.")
        else:
            recommendations.append("✅ Good coding style compliance!")

        if summary.major_files > 0:
            recommendations.append(f"🔥 {summary.major_files} files have major violations. Address these first.")

        if summary.error_files > 0:
            recommendations.append(f"📛 {summary.error_files} files could not be read.")

        if summary.most_common_violations:
            rule, count = summary.most_common_violations[0]
            recommendations.append(f"📊 Most common violation: {rule} ({count} occurrences).")

        problematic_files = self.get_most_problematic_files(3)
        if problematic_files:
            recommendations.append(f"📁 Focus on these files: {', '.join(f.filename for f in problematic_files)}")

        return recommendations

    def file_to_dict(self, file_info: FileInfo) -> Dict[str, Any]:
        return {
            'filepath': file_info.filepath,
            'filename': file_info.filename,
            'status': file_info.status.value,
            'violation_count': file_info.violation_count,
            'major_violations': file_info.major_violations,
            'minor_violations': file_info.minor_violations,
            'info_violations': file_info.info_violations,
            'rules': sorted(file_info.rules),
            'lines': file_info.lines,
            'error': file_info.error,
        }

    def export_report(self, include_violations: bool = False) -> Dict[str, Any]:
        """
        Export a comprehensive report as a JSON-serializable dictionary.

        Args:
            include_violations: Whether to list every violation of every file

        Returns:
            Report data as dictionary
        """
        summary = self.generate_project_summary()

        file_details = []
        for file_info in self.files:
            details = self.file_to_dict(file_info)
            if include_violations:
                result = self.scan_results[file_info.filepath]
                details['violations'] = [v.to_dict() for v in result.violations]
            file_details.append(details)

        return {
            'summary': {
                'total_files': summary.total_files,
                'ok_files': summary.ok_files,
                'minor_files': summary.minor_files,
                'major_files': summary.major_files,
                'error_files': summary.error_files,
                'total_violations': summary.total_violations,
                'total_lines': summary.total_lines,
                'success_rate': summary.success_rate,
                'most_common_violations': summary.most_common_violations,
                'rule_distribution': summary.rule_distribution,
                'severity_distribution': summary.severity_distribution
            },
            'recommendations': self.get_recommendations(),
            'files': file_details,
            'most_problematic_files': [
                {
                    'filename': f.filename,
                    'violation_count': f.violation_count,
                    'status': f.status.value
                }
                for f in self.get_most_problematic_files(10)
            ]
        }

    def search_files(self, query: str) -> List[FileInfo]:
        """
        Search files by path or violated rule.

        Args:
            query: Search query

        Returns:
            List of matching FileInfo objects
        """
        query_lower = query.lower()
        return [
            f for f in self.files
            if query_lower in f.filepath.lower()
            or any(query_lower in rule.lower() for rule in f.rules)
        ]

    def get_statistics(self) -> Dict[str, Any]:
        """Get detailed statistics for dashboard display."""
        summary = self.generate_project_summary()

        return {
            'overview': {
                'total_files': summary.total_files,
                'success_rate': summary.success_rate,
                'total_violations': summary.total_violations,
            },
            'file_status_distribution': {
                status.value: count
                for status, count in (
                    (FileStatus.OK, summary.ok_files),
                    (FileStatus.MINOR, summary.minor_files),
                    (FileStatus.MAJOR, summary.major_files),
                    (FileStatus.ERROR, summary.error_files),
                )
            },
            'severity_distribution': summary.severity_distribution,
            'rule_distribution': dict(summary.most_common_violations),
            'code_metrics': {
                'total_lines': summary.total_lines,
                'average_violations_per_file': summary.total_violations / summary.total_files if summary.total_files > 0 else 0,
                'violation_density': summary.total_violations / summary.total_lines if summary.total_lines > 0 else 0
            }
        }
