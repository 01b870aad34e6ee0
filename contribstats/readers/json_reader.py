"""
JSON Reader for reading standard JSON files
"""

import json
import warnings
from typing import Any, Dict, Iterator, List, Optional

from contribstats.readers.base import BaseReader

# Keys probed, in order, when the root is an object and no records_key is given
COMMON_RECORD_KEYS = ["contributions", "data", "records", "rows", "items", "results"]


class JSONReader(BaseReader):
    """
    Reader for standard JSON files.

    Supports:
    - Array of objects: [{"a": 1}, {"a": 2}]
    - Object with records key: {"data": [{"a": 1}, ...], "meta": ...}
    - Column selection and limit
    """

    format_name = "json"

    def __init__(self, path: str, records_key: Optional[str] = None, encoding: str = "utf-8"):
        """
        Initialize JSON reader

        Args:
            path: Path to JSON file
            records_key: Key containing the list of records (e.g., "data", "records").
                        If None, attempts to auto-detect or expects root to be a list.
            encoding: File encoding (default: utf-8)
        """
        super().__init__(path, encoding)
        self.records_key = records_key

    def read_lazy(self) -> Iterator[Dict[str, Any]]:
        """
        Read JSON file and yield records.

        Note: Standard JSON parsing loads the whole file into memory.
        For large files, use JSONL format.
        """
        with open(self.path, encoding=self.encoding) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON file {self.path}: {e}") from e

        yield from self._emit(self._iter_records(self._locate_records(data)))

    def _iter_records(self, records: List[Any]) -> Iterator[Dict[str, Any]]:
        for index, row in enumerate(records):
            if not isinstance(row, dict):
                warnings.warn(f"Skipping non-object record at index {index}", UserWarning)
                continue
            yield row

    def _locate_records(self, data: Any) -> List[Any]:
        """
        Find the list of records in the JSON data.

        Raises:
            ValueError: If no list of records can be found
        """
        if self.records_key:
            if not isinstance(data, dict) or self.records_key not in data:
                raise ValueError(f"Key '{self.records_key}' not found in {self.path}")
            records = data[self.records_key]
            if not isinstance(records, list):
                raise ValueError(f"Key '{self.records_key}' does not hold a list")
            return records

        if isinstance(data, list):
            return data

        if isinstance(data, dict):
            for key in COMMON_RECORD_KEYS:
                if isinstance(data.get(key), list):
                    return data[key]

            # Fall back to the only list-valued key, if there is exactly one
            list_keys = [k for k, v in data.items() if isinstance(v, list)]
            if len(list_keys) == 1:
                return data[list_keys[0]]

        raise ValueError(
            f"Could not find a list of records in {self.path}. "
            "Pass records_key to choose one."
        )
