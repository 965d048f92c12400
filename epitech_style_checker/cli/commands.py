"""
Command-line interface for the Epitech-Style-Checker.

This module provides CLI commands for scanning C/C++ projects, reporting
coding-style violations and serving the JSON API.
"""

import sys
import json
import click
import logging
from pathlib import Path
from typing import List
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.panel import Panel

from .. import __version__
from ..core.scanner import StyleScanner, FileResult, VALID_EXTENSIONS
from ..core.aggregator import FileAggregator, FileStatus
from ..core.rules import DEFAULT_RULES
from ..core.spans import Severity
from ..dashboard.app import create_app

console = Console()

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    Severity.MAJOR: "bold red",
    Severity.MINOR: "yellow",
    Severity.INFO: "dim",
}

extensions_option = click.option(
    '--ext', 'extensions', multiple=True, default=VALID_EXTENSIONS, show_default=True,
    help='File extension to scan (repeatable)'
)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose):
    """Epitech-Style-Checker - coding-style checks for C/C++ sources."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        console.print("[dim]Verbose mode enabled[/dim]")


def collect_results(path: str, recursive: bool, extensions) -> List[FileResult]:
    """Scan a path behind a progress spinner."""
    scanner = StyleScanner(extensions=extensions)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True
    ) as progress:
        progress.add_task("Scanning files...", total=None)
        return scanner.scan_path(path, recursive=recursive)


def build_aggregator(results: List[FileResult]) -> FileAggregator:
    aggregator = FileAggregator()
    for result in results:
        aggregator.add_scan_result(result)
    return aggregator


@main.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--recursive/--no-recursive', default=True, help='Scan directories recursively')
@click.option('--output', '-o', type=click.Path(), help='Output file for results (JSON format)')
@click.option('--filter-status', type=click.Choice([s.value for s in FileStatus]),
              help='Filter results by status')
@click.option('--filter-rule', help='Filter results by rule name')
@click.option('--show-details', is_flag=True, help='Show every violation of every file')
@extensions_option
def scan(path, recursive, output, filter_status, filter_rule, show_details, extensions):
    """Scan a file or directory for coding-style violations."""
    console.print(f"[bold blue]Scanning:[/bold blue] {path}")

    try:
        results = collect_results(path, recursive, extensions)
        aggregator = build_aggregator(results)
    except Exception as e:
        console.print(f"[red]Error during scan: {e}[/red]")
        sys.exit(1)

    display_scan_results(aggregator, filter_status, filter_rule, show_details)

    if output:
        save_report_to_file(aggregator.export_report(include_violations=True), output, 'json')
        console.print(f"[green]Results saved to {output}[/green]")


@main.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True))
@click.option('--recursive/--no-recursive', default=True, help='Scan directories recursively')
@extensions_option
def check(paths, recursive, extensions):
    """Print violations one per line and fail when any is found."""
    failed = False

    try:
        scanner = StyleScanner(extensions=extensions)
        for path in paths:
            for result in scanner.scan_path(path, recursive=recursive):
                if result.error:
                    click.echo(f"{result.filepath}: error: {result.error}", err=True)
                    failed = True
                for violation in result.violations:
                    click.echo(f"{result.filepath}:{violation}")
                    failed = True
    except Exception as e:
        console.print(f"[red]Error during check: {e}[/red]")
        sys.exit(1)

    sys.exit(1 if failed else 0)


@main.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--output', '-o', type=click.Path(), help='Output file for report')
@click.option('--format', 'report_format', type=click.Choice(['json', 'html', 'text']),
              default='text', help='Report format')
@click.option('--include-recommendations', is_flag=True, help='Include recommendations in report')
@extensions_option
def report(path, output, report_format, include_recommendations, extensions):
    """Generate a report of the coding-style violations of a project."""
    console.print(f"[bold cyan]Generating report for:[/bold cyan] {path}")

    try:
        aggregator = build_aggregator(collect_results(path, True, extensions))
    except Exception as e:
        console.print(f"[red]Error generating report: {e}[/red]")
        sys.exit(1)

    report_data = aggregator.export_report(include_violations=report_format == 'json')

    if output:
        save_report_to_file(report_data, output, report_format)
        console.print(f"[green]Report saved to {output}[/green]")
    else:
        display_text_report(aggregator, include_recommendations)


@main.command()
def rules():
    """List the pattern rules in scan order."""
    table = Table(title="Pattern Rules")
    table.add_column("#", justify="right")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Severity", justify="center")
    table.add_column("Message")

    for i, rule in enumerate(DEFAULT_RULES, 1):
        style = SEVERITY_STYLES[rule.severity]
        table.add_row(str(i), rule.name, f"[{style}]{rule.severity.value}[/{style}]", rule.message)

    console.print(table)


@main.command()
@click.option('--host', default='127.0.0.1', help='Host to bind to')
@click.option('--port', default=8080, help='Port to bind to')
@click.option('--debug', is_flag=True, help='Enable debug mode')
def dashboard(host, port, debug):
    """Launch the JSON API used by editors and CI reporters."""
    console.print(f"[bold green]Starting API at http://{host}:{port}[/bold green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    try:
        app = create_app()
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        console.print("\n[yellow]API stopped[/yellow]")
    except Exception as e:
        console.print(f"[red]Failed to start API: {e}[/red]")
        sys.exit(1)


def display_scan_results(aggregator, filter_status, filter_rule, show_details):
    """Display scan results in a formatted table."""
    summary = aggregator.generate_project_summary()
    summary_text = f"""
Total Files: {summary.total_files}
OK Files: {summary.ok_files}
Files with Major Violations: {summary.major_files}
Files with Minor Violations: {summary.minor_files}
Unreadable Files: {summary.error_files}
Success Rate: {summary.success_rate:.1f}%
Total Violations: {summary.total_violations}
    """.strip()

    console.print(Panel(summary_text, title="Scan Summary", border_style="blue"))

    files = aggregator.filter_files(
        status=FileStatus(filter_status) if filter_status else None,
        rule=filter_rule
    )

    if not files:
        console.print("[yellow]No files match the specified filters[/yellow]")
        return

    table = Table(title="Files")
    table.add_column("File", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Violations", justify="center")
    table.add_column("Major", justify="center")
    table.add_column("Rules", style="dim")

    for file_info in files:
        status_style = {
            FileStatus.OK: "green",
            FileStatus.MINOR: "yellow",
            FileStatus.MAJOR: "bold red",
            FileStatus.ERROR: "red"
        }.get(file_info.status, "white")

        table.add_row(
            file_info.filename,
            f"[{status_style}]{file_info.status.value}[/{status_style}]",
            str(file_info.violation_count),
            str(file_info.major_violations),
            ", ".join(sorted(file_info.rules)) if file_info.rules else "None"
        )

    console.print(table)

    if show_details:
        for file_info in files:
            display_file_violations(aggregator.scan_results[file_info.filepath])


def display_file_violations(result: FileResult):
    """Display every violation of one file."""
    if not result.violations:
        return

    table = Table(title=result.filepath)
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity", justify="center")
    table.add_column("Rule", style="cyan")
    table.add_column("Message")

    for violation in result.violations:
        style = SEVERITY_STYLES[violation.severity]
        table.add_row(
            str(violation.span.start_line + 1),
            str(violation.span.start_col + 1),
            f"[{style}]{violation.severity.value}[/{style}]",
            violation.rule,
            violation.message
        )

    console.print(table)


def save_report_to_file(report_data, output_path, report_format):
    """Save report to file in specified format."""
    if report_format == 'json':
        content = json.dumps(report_data, indent=2)
    elif report_format == 'html':
        content = generate_html_report(report_data)
    else:
        content = generate_text_report(report_data)

    Path(output_path).write_text(content, encoding='utf-8')


def display_text_report(aggregator, include_recommendations):
    """Display a text report to console."""
    summary = aggregator.generate_project_summary()

    console.print(Panel.fit(
        f"[bold]Coding Style Report[/bold]\n\n"
        f"Total Files: {summary.total_files}\n"
        f"OK Files: {summary.ok_files}\n"
        f"Files with Major Violations: {summary.major_files}\n"
        f"Files with Minor Violations: {summary.minor_files}\n"
        f"Success Rate: {summary.success_rate:.1f}%\n"
        f"Total Violations: {summary.total_violations}",
        title="Summary",
        border_style="green"
    ))

    if summary.most_common_violations:
        console.print("\n[bold]Most Common Violations:[/bold]")
        for rule, count in summary.most_common_violations[:5]:
            console.print(f"  • {rule}: {count} occurrences")

    if include_recommendations:
        recommendations = aggregator.get_recommendations()
        if recommendations:
            console.print("\n[bold]Recommendations:[/bold]")
            for rec in recommendations:
                console.print(f"  {rec}")


def generate_html_report(report_data):
    """Generate HTML report content."""
    summary = report_data['summary']
    html = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>Coding Style Report</title>
        <style>
            body {{ font-family: Arial, sans-serif; margin: 40px; }}
            .summary {{ background: #f5f5f5; padding: 20px; border-radius: 5px; }}
            td, th {{ padding: 4px 12px; text-align: left; }}
        </style>
    </head>
    <body>
        <h1>Coding Style Report</h1>
        <div class="summary">
            <h2>Summary</h2>
            <p>Total Files: {summary['total_files']}</p>
            <p>OK Files: {summary['ok_files']}</p>
            <p>Files with Major Violations: {summary['major_files']}</p>
            <p>Files with Minor Violations: {summary['minor_files']}</p>
            <p>Success Rate: {summary['success_rate']:.1f}%</p>
        </div>
        <h2>Files</h2>
        <table>
            <tr><th>File</th><th>Status</th><th>Violations</th></tr>
    """

    for file_data in report_data.get('files', []):
        html += (f"<tr><td>{file_data['filepath']}</td><td>{file_data['status']}</td>"
                 f"<td>{file_data['violation_count']}</td></tr>")

    html += """
        </table>
        <h2>Recommendations</h2>
        <ul>
    """

    for rec in report_data.get('recommendations', []):
        html += f"<li>{rec}</li>"

    html += """
        </ul>
    </body>
    </html>
    """

    return html


def generate_text_report(report_data):
    """Generate text report content."""
    summary = report_data['summary']
    lines = [
        "CODING STYLE REPORT",
        "=" * 50,
        "",
        "SUMMARY:",
        f"Total Files: {summary['total_files']}",
        f"OK Files: {summary['ok_files']}",
        f"Files with Major Violations: {summary['major_files']}",
        f"Files with Minor Violations: {summary['minor_files']}",
        f"Success Rate: {summary['success_rate']:.1f}%",
        f"Total Violations: {summary['total_violations']}",
        "",
        "FILES:",
    ]

    for file_data in report_data.get('files', []):
        lines.append(f"{file_data['filepath']}: {file_data['status']} ({file_data['violation_count']})")

    lines.extend(["", "RECOMMENDATIONS:"])
    for rec in report_data.get('recommendations', []):
        lines.append(f"- {rec}")

    return "\n".join(lines)


if __name__ == '__main__':
    main()
