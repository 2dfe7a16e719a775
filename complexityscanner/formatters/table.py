"""
Table output formatter built on rich.
"""

from io import StringIO
from typing import List

from rich.console import Console
from rich.table import Table
from rich.text import Text

from complexityscanner.core.results import AnalysisReport, AnalysisResult
from complexityscanner.formatters.cli import supports_color


class TableFormatter:
    """Renders one table row per function."""

    def __init__(self, use_color: bool = True, width: int = 120):
        self.use_color = use_color and supports_color()
        self.width = width

    def _render(self, table: Table) -> str:
        buffer = StringIO()
        console = Console(
            file=buffer,
            width=self.width,
            force_terminal=self.use_color,
            no_color=not self.use_color,
        )
        console.print(table)
        return buffer.getvalue().rstrip("\n")

    def _complexity_style(self, complexity: int) -> str:
        if complexity >= 15:
            return "bold red"
        if complexity >= 8:
            return "yellow"
        return "green"

    def build_table(self, results: List[AnalysisResult]) -> Table:
        total = sum(r.complexity for r in results)
        table = Table(
            title="Cognitive Complexity",
            caption=f"Total complexity: {total}",
            show_header=True,
        )
        table.add_column("File", style="cyan", overflow="fold")
        table.add_column("Function", min_width=12)
        table.add_column("Language")
        table.add_column("Lines", justify="right")
        table.add_column("Complexity", justify="right")

        # Paths and names are plain text, never markup
        for result in results:
            table.add_row(
                Text(result.file_path),
                Text(result.function_name),
                result.language,
                f"{result.start_line}-{result.end_line}",
                Text(str(result.complexity), style=self._complexity_style(result.complexity)),
            )

        return table

    def format_results(self, results: List[AnalysisResult]) -> str:
        return self._render(self.build_table(results))

    def format_report(self, report: AnalysisReport) -> str:
        return self.format_results(report.results)
