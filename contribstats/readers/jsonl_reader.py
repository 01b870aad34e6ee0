"""
JSONL Reader for reading line-delimited JSON files
"""

import json
import warnings
from typing import Any, Dict, Iterator

from contribstats.readers.base import BaseReader


class JSONLReader(BaseReader):
    """
    Reader for JSONL (JSON Lines) files.

    Format:
    {"team_name": "Team A", "category": "Engineering", "value": 10}
    {"team_name": "Team B", "category": "Engineering", "value": 42}

    Features:
    - True lazy loading (line-by-line)
    - Blank lines ignored
    - Malformed lines skipped with a warning
    """

    format_name = "jsonl"

    def read_lazy(self) -> Iterator[Dict[str, Any]]:
        """
        Yield rows from JSONL file line by line
        """
        yield from self._emit(self._read_lines())

    def _read_lines(self) -> Iterator[Dict[str, Any]]:
        with open(self.path, encoding=self.encoding) as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    row = json.loads(line)
                except json.JSONDecodeError:
                    warnings.warn(f"Skipping invalid JSON at line {line_num}", UserWarning)
                    continue

                if not isinstance(row, dict):
                    warnings.warn(f"Skipping non-dict row at line {line_num}", UserWarning)
                    continue

                yield row
