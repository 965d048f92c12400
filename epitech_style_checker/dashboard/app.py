"""
Flask JSON API for the Epitech-Style-Checker

This module exposes the checks over HTTP so that editors can highlight the
violations of the buffer they are showing and CI jobs can collect project
reports.
"""

import os
import logging
from typing import Dict, Any, Optional
from pathlib import Path
from datetime import datetime

from flask import Flask, request, jsonify
from flask_cors import CORS

from ..core.scanner import StyleScanner
from ..core.aggregator import FileAggregator, FileStatus
from ..core.reporter import excerpt
from ..core.rules import DEFAULT_RULES

logger = logging.getLogger(__name__)


class StyleDashboard:
    """State shared by the API endpoints: the last project scanned."""

    def __init__(self, scanner: Optional[StyleScanner] = None):
        self.scanner = scanner or StyleScanner()
        self.aggregator = FileAggregator()
        self.current_project_path = None

    def check_text(self, text: str, filename: Optional[str] = None) -> Dict[str, Any]:
        """
        Check an editor buffer.

        Args:
            text: Buffer content
            filename: Buffer file name, used for the extension filter

        Returns:
            Dictionary with the violations found
        """
        if filename and not self.scanner.is_eligible(filename):
            return {'success': True, 'skipped': True, 'violations': []}

        violations = self.scanner.scan_text(text)
        return {
            'success': True,
            'skipped': False,
            'violations': [
                dict(v.to_dict(), text=excerpt(text, v))
                for v in violations
            ]
        }

    def scan_project(self, project_path: str) -> Dict[str, Any]:
        """
        Scan a project directory.

        Args:
            project_path: Path to the project directory

        Returns:
            Dictionary with scan results and statistics
        """
        try:
            self.current_project_path = project_path
            results = self.scanner.scan_directory(project_path, recursive=True)

            self.aggregator = FileAggregator()
            for result in results:
                self.aggregator.add_scan_result(result)

            report = self.aggregator.export_report()
            return {
                'success': True,
                'project_path': project_path,
                'scan_time': datetime.now().isoformat(),
                'summary': report['summary'],
                'recommendations': report['recommendations'],
                'statistics': self.aggregator.get_statistics()
            }

        except Exception as e:
            logger.error(f"Error scanning project {project_path}: {e}")
            return {
                'success': False,
                'error': str(e)
            }

    def get_file_details(self, filepath: str) -> Dict[str, Any]:
        """Get the violations of one scanned file."""
        result = self.aggregator.scan_results.get(filepath)
        if result is None:
            return {'success': False, 'error': 'File not found in scan results'}

        return {
            'success': True,
            'filepath': filepath,
            'filename': Path(filepath).name,
            'status': result.status,
            'violation_count': result.violation_count,
            'violations': [v.to_dict() for v in result.violations],
            'error': result.error
        }


def create_app(config=None):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    if config:
        app.config.update(config)

    CORS(app)

    dashboard = StyleDashboard()
    app.extensions['style_dashboard'] = dashboard

    @app.route('/api/check', methods=['POST'])
    def api_check():
        """API endpoint to check the text of one editor buffer."""
        data = request.get_json(silent=True) or {}
        text = data.get('text')

        if text is None:
            return jsonify({'success': False, 'error': 'Text is required'}), 400
        if not isinstance(text, str):
            return jsonify({'success': False, 'error': 'Text must be a string'}), 400

        return jsonify(dashboard.check_text(text, data.get('filename')))

    @app.route('/api/scan', methods=['POST'])
    def api_scan():
        """API endpoint to scan a project directory."""
        data = request.get_json(silent=True) or {}
        project_path = data.get('project_path')

        if not project_path:
            return jsonify({'success': False, 'error': 'Project path is required'}), 400

        if not os.path.isdir(project_path):
            return jsonify({'success': False, 'error': 'Project path does not exist'}), 400

        return jsonify(dashboard.scan_project(project_path))

    @app.route('/api/files')
    def api_files():
        """API endpoint to get list of files with filtering."""
        status = request.args.get('status')
        rule = request.args.get('rule')
        search_query = request.args.get('search', '')

        status_enum = None
        if status and status != 'all':
            try:
                status_enum = FileStatus(status)
            except ValueError:
                return jsonify({'success': False, 'error': f'Unknown status: {status}'}), 400

        files = dashboard.aggregator.filter_files(
            status=status_enum,
            rule=rule if rule and rule != 'all' else None
        )

        if search_query:
            matches = dashboard.aggregator.search_files(search_query)
            files = [f for f in files if f in matches]

        files_data = [dashboard.aggregator.file_to_dict(f) for f in files]
        return jsonify({
            'success': True,
            'files': files_data,
            'total_count': len(files_data)
        })

    @app.route('/api/files/<path:filepath>')
    def api_file_details(filepath):
        """API endpoint to get detailed information about a specific file."""
        result = dashboard.get_file_details(filepath)
        if not result['success'] and not filepath.startswith('/'):
            # Absolute paths lose their leading slash in the URL
            result = dashboard.get_file_details('/' + filepath)
        return jsonify(result), 200 if result['success'] else 404

    @app.route('/api/rules')
    def api_rules():
        """API endpoint to list the pattern rules."""
        return jsonify({
            'success': True,
            'rules': [
                {
                    'name': rule.name,
                    'message': rule.message,
                    'severity': rule.severity.value,
                    'pattern': rule.pattern.pattern
                }
                for rule in DEFAULT_RULES
            ]
        })

    @app.route('/api/statistics')
    def api_statistics():
        """API endpoint to get project statistics."""
        return jsonify({
            'success': True,
            'statistics': dashboard.aggregator.get_statistics()
        })

    @app.route('/api/recommendations')
    def api_recommendations():
        """API endpoint to get project recommendations."""
        return jsonify({
            'success': True,
            'recommendations': dashboard.aggregator.get_recommendations()
        })

    @app.route('/api/export')
    def api_export():
        """API endpoint to export project report."""
        include_violations = request.args.get('violations', 'false').lower() == 'true'
        return jsonify(dashboard.aggregator.export_report(include_violations=include_violations))

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'success': False, 'error': 'Endpoint not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {error}")
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
