"""
JSON formatter for machine-readable output
"""

import json
import math
from typing import Any

from contribstats.cli.formatters.base import BaseFormatter


class JSONFormatter(BaseFormatter):
    """Format metric rows as JSON"""

    def format(self, results: list[dict[str, Any]], **kwargs) -> str:
        """
        Format metric rows as JSON

        Args:
            results: One dictionary per category
            **kwargs: Options like 'compact', 'indent', and 'value_field'.
                      With 'value_field' the output is a single object
                      mapping each category to that field's value.

        Returns:
            JSON string
        """

        # NaN and infinity are not valid JSON
        def clean_value(val):
            if isinstance(val, float) and (math.isnan(val) or math.isinf(val)):
                return None
            return val

        value_field = kwargs.get("value_field")
        if value_field:
            payload: Any = {
                row["category"]: clean_value(row.get(value_field)) for row in results
            }
        else:
            payload = [{k: clean_value(v) for k, v in row.items()} for row in results]

        if kwargs.get("compact", False):
            return json.dumps(payload, separators=(",", ":"))
        return json.dumps(payload, indent=kwargs.get("indent", 2))
