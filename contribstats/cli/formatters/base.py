"""
Base formatter interface for CLI output

Formatters turn per-category metric rows into text. Each row holds a
``category`` plus one value field per computed metric.
"""

from typing import Any, Dict, List


class BaseFormatter:
    """Base class for all output formatters"""

    def format(self, results: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format metric rows for output

        Args:
            results: One dictionary per category, e.g.
                     {"category": "Engineering", "maxValue": 42}
            **kwargs: Additional formatter-specific options

        Returns:
            Formatted string ready for output
        """
        raise NotImplementedError("Formatters must implement format() method")

    @staticmethod
    def columns(results: List[Dict[str, Any]]) -> List[str]:
        """Union of row keys in first-seen order, so ``category`` leads"""
        columns: List[str] = []
        for row in results:
            columns.extend(k for k in row if k not in columns)
        return columns

    def get_name(self) -> str:
        """Get formatter name (``TableFormatter`` -> ``table``)"""
        return self.__class__.__name__.replace("Formatter", "").lower()
