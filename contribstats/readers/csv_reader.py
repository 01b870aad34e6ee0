"""
CSV Reader with lazy evaluation and type inference

Uses Python's built-in csv module for simplicity and zero dependencies.
"""

import csv
import warnings
from typing import Any, Dict, Iterator

from contribstats.core.types import infer_type_from_string
from contribstats.readers.base import BaseReader


class CSVReader(BaseReader):
    """
    Lazy CSV reader with basic type inference

    Features:
    - Lazy iteration (doesn't load entire file into memory)
    - Automatic type inference (int, float, string)
    - Empty cells read as None
    - Malformed rows skipped with a warning
    """

    format_name = "csv"

    def __init__(self, path: str, encoding: str = "utf-8", delimiter: str = ","):
        """
        Initialize CSV reader

        Args:
            path: Path to CSV file
            encoding: File encoding (default: utf-8)
            delimiter: CSV delimiter (default: comma)
        """
        super().__init__(path, encoding)
        self.delimiter = delimiter

    def read_lazy(self) -> Iterator[Dict[str, Any]]:
        """
        Lazy iterator over CSV rows

        Yields rows as dictionaries with type inference applied.
        """
        yield from self._emit(self._read_rows())

    def _read_rows(self) -> Iterator[Dict[str, Any]]:
        with open(self.path, encoding=self.encoding, newline="") as f:
            reader = csv.DictReader(f, delimiter=self.delimiter)

            for row_num, raw_row in enumerate(reader, start=2):  # Start at 2 (after header)
                # Extra cells land under the None key
                if None in raw_row:
                    warnings.warn(
                        f"Skipping malformed row {row_num} in {self.path}: "
                        f"row has extra columns: {raw_row[None]}",
                        UserWarning,
                    )
                    continue

                yield self._infer_types(raw_row)

    def _infer_types(self, row: Dict[str, str]) -> Dict[str, Any]:
        """
        Infer types for all values in a row

        Tries to convert strings to int, then float, otherwise keeps as string.
        Missing trailing cells read as None.
        """
        return {key: infer_type_from_string(value) for key, value in row.items()}
