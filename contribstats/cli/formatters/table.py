"""
Rich table formatter for terminal output
"""

from typing import Any, Dict, List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from contribstats.cli.formatters.base import BaseFormatter


class TableFormatter(BaseFormatter):
    """Format metric rows as a Rich table"""

    def format(self, results: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format metric rows as a Rich table

        Args:
            results: One dictionary per category
            **kwargs: Options like 'no_color', 'show_footer', 'title',
                      'precision' (decimal places for floats, default 2)

        Returns:
            Formatted table string
        """
        if not results:
            return "No categories found."

        no_color = kwargs.get("no_color", False)
        console = Console(force_terminal=not no_color, no_color=no_color)
        precision = kwargs.get("precision", 2)

        columns = self.columns(results)

        table = Table(
            show_header=True,
            header_style="bold magenta",
            title=kwargs.get("title"),
            box=box.SIMPLE if console.width < 80 else box.HEAVY_HEAD,
        )
        for col in columns:
            if col == "category":
                table.add_column(col, style="cyan", overflow="ellipsis", max_width=30)
            else:
                table.add_column(col, justify="right")

        for row in results:
            table.add_row(*[self._cell(row.get(col), precision) for col in columns])

        with console.capture() as capture:
            console.print(table)
        output = capture.get()

        if kwargs.get("show_footer", True):
            count = len(results)
            with console.capture() as capture:
                console.print(f"[dim]{count} categor{'ies' if count != 1 else 'y'}[/dim]")
            output += capture.get()

        return output

    @staticmethod
    def _cell(value: Any, precision: int) -> str:
        if value is None:
            return "[dim]-[/dim]"
        if isinstance(value, float):
            return f"{value:.{precision}f}"
        return escape(str(value))
