"""
CLI output formatter for human-readable results.
"""

import sys
from typing import List

from complexityscanner.core.results import AnalysisReport, AnalysisResult


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"


def supports_color() -> bool:
    """Check if the terminal supports color output."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    if not sys.stdout.isatty():
        return False
    return True


class TextFormatter:
    """
    Formats analysis results for human-readable CLI output.

    One block per function, followed by the total complexity.
    """

    def __init__(self, use_color: bool = True, verbose: bool = False, show_factors: bool = True):
        self.use_color = use_color and supports_color()
        self.verbose = verbose
        self.show_factors = show_factors
        self.high_complexity = 15
        self.medium_complexity = 8

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_color:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _complexity_color(self, complexity: int) -> str:
        if complexity >= self.high_complexity:
            return Colors.RED
        if complexity >= self.medium_complexity:
            return Colors.YELLOW
        return Colors.GREEN

    def format_function(self, result: AnalysisResult) -> str:
        """Format a single function's result."""
        lines = [
            f"File: {result.file_path}",
            f"Function: {self._color(result.function_name, Colors.BOLD)}",
            f"Language: {result.language}",
            f"Lines: {result.start_line}-{result.end_line}",
            "Complexity: " + self._color(str(result.complexity), self._complexity_color(result.complexity)),
        ]

        if self.show_factors and result.factors:
            lines.append("Complexity Factors:")
            for factor in result.factors:
                lines.append(self._color(
                    f"  - {factor.description} (line {factor.line_number}, +{factor.increment})",
                    Colors.DIM,
                ))

        return "\n".join(lines)

    def format_results(self, results: List[AnalysisResult]) -> str:
        """Format a list of results with the total complexity."""
        blocks = [self.format_function(result) + "\n" for result in results]
        total = sum(r.complexity for r in results)
        blocks.append(self._color(f"Total complexity: {total}", Colors.BOLD))
        return "\n".join(blocks)

    def format_report(self, report: AnalysisReport) -> str:
        """Format a complete analysis report."""
        output = self.format_results(report.results)

        if self.verbose:
            summary = [
                "",
                self._color("Summary", Colors.BOLD),
                self._color("-" * 40, Colors.DIM),
                f"  Files analyzed:    {report.files_analyzed}",
                f"  Functions:         {report.function_count}",
                f"  Max complexity:    {report.max_complexity}",
                f"  Languages:         {', '.join(report.languages_detected)}",
                f"  Analysis time:     {report.analysis_time_seconds:.2f}s",
            ]
            output += "\n" + "\n".join(summary)

        if report.errors:
            errors = ["", self._color("Errors", Colors.RED)]
            errors.extend(f"  {error}" for error in report.errors)
            output += "\n" + "\n".join(errors)

        return output
