"""
Output formatters for CLI

Available formatters:
- TableFormatter: Rich tables
- JSONFormatter: Machine-readable JSON
- CSVFormatter: Unix-friendly CSV
"""

from contribstats.cli.formatters.base import BaseFormatter
from contribstats.cli.formatters.csv import CSVFormatter
from contribstats.cli.formatters.json import JSONFormatter
from contribstats.cli.formatters.table import TableFormatter

__all__ = ["BaseFormatter", "TableFormatter", "JSONFormatter", "CSVFormatter", "get_formatter"]

FORMATTERS = {
    "table": TableFormatter,
    "json": JSONFormatter,
    "csv": CSVFormatter,
}


def get_formatter(format_name: str) -> BaseFormatter:
    """
    Get formatter by name

    Args:
        format_name: Name of formatter (table, json, csv)

    Returns:
        Formatter instance

    Raises:
        ValueError: If formatter not found
    """
    if format_name not in FORMATTERS:
        available = ", ".join(FORMATTERS.keys())
        raise ValueError(f"Unknown format: {format_name}. Available formats: {available}")

    return FORMATTERS[format_name]()
