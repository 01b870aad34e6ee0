"""
CSV formatter for Unix-friendly output
"""

import csv
import io
from typing import Any, Dict, List

from contribstats.cli.formatters.base import BaseFormatter


class CSVFormatter(BaseFormatter):
    """Format metric rows as CSV"""

    def format(self, results: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format metric rows as CSV

        Args:
            results: One dictionary per category
            **kwargs: Options like 'delimiter', 'quote_all'

        Returns:
            CSV string with a header row; empty string for no rows
        """
        if not results:
            return ""

        # Missing metrics stay blank
        columns = self.columns(results)

        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=columns,
            delimiter=kwargs.get("delimiter", ","),
            quoting=csv.QUOTE_ALL if kwargs.get("quote_all") else csv.QUOTE_MINIMAL,
            restval="",
            lineterminator="\n",
        )
        writer.writeheader()
        writer.writerows(results)

        return output.getvalue()
