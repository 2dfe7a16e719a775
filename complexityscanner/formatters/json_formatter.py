"""
JSON output formatter for machine-readable results.
"""

import json
from typing import List

from complexityscanner.core.results import AnalysisReport, AnalysisResult


class JSONFormatter:
    """
    Formats analysis results as JSON for machine consumption.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format_report(self, report: AnalysisReport) -> str:
        """Format a complete analysis report as JSON."""
        return json.dumps(report.to_dict(), indent=self.indent)

    def format_results(self, results: List[AnalysisResult]) -> str:
        """Format a list of results with their total complexity."""
        data = {
            "total_complexity": sum(r.complexity for r in results),
            "results": [r.to_dict() for r in results],
        }
        return json.dumps(data, indent=self.indent)

    def format_function(self, result: AnalysisResult) -> str:
        """Format a single result as JSON."""
        return json.dumps(result.to_dict(), indent=self.indent)

    @staticmethod
    def parse_results(text: str) -> List[AnalysisResult]:
        """Read results back from format_results() or format_report() output."""
        data = json.loads(text)
        return [AnalysisResult.from_dict(item) for item in data.get("results", [])]
