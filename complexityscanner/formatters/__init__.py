"""
Output formatters for analysis results.

Provides multiple output formats including:
- Human-readable CLI output
- JSON for machine processing
- Tables rendered with rich
"""

from complexityscanner.formatters.cli import TextFormatter
from complexityscanner.formatters.json_formatter import JSONFormatter
from complexityscanner.formatters.table import TableFormatter

__all__ = [
    "TextFormatter",
    "JSONFormatter",
    "TableFormatter",
    "get_formatter",
]


def get_formatter(format_name: str):
    """Get a formatter by name."""
    formatters = {
        "text": TextFormatter,
        "cli": TextFormatter,
        "json": JSONFormatter,
        "table": TableFormatter,
    }

    formatter_class = formatters.get(format_name.lower())
    if formatter_class:
        return formatter_class()

    raise ValueError(f"Unknown format: {format_name}")
