"""
Base reader interface for contribution files

All readers implement this interface so the loader can treat every file
format the same way.
"""

from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional


class BaseReader:
    """
    Base class for all file readers

    Readers are responsible for:
    1. Reading records from a local file
    2. Yielding records as dictionaries (lazy evaluation)
    3. Optionally keeping only some columns and stopping early
    """

    format_name = "base"

    def __init__(self, path: str, encoding: str = "utf-8"):
        """
        Initialize reader

        Args:
            path: Path to the file
            encoding: File encoding (default: utf-8)

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self.path = Path(path)
        self.encoding = encoding

        self.required_columns: List[str] = []
        self.limit: Optional[int] = None

        if not self.path.exists():
            raise FileNotFoundError(f"{self.format_name.upper()} file not found: {path}")

    def read_lazy(self) -> Iterator[Dict[str, Any]]:
        """
        Yield records as dictionaries

        This is the core method that all readers must implement.

        Yields:
            Dictionary representing one record

        Example:
            {'team_name': 'Team A', 'category': 'Engineering', 'value': 42}
        """
        raise NotImplementedError("Subclasses must implement read_lazy()")

    def set_columns(self, columns: List[str]) -> None:
        """
        Set which columns to keep

        Args:
            columns: Column names; missing columns come back as None
        """
        self.required_columns = columns

    def set_limit(self, limit: int) -> None:
        """Stop after yielding 'limit' records"""
        self.limit = limit

    def _emit(self, records: Iterator[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
        """Apply column selection and limit to a record stream"""
        rows_yielded = 0
        for row in records:
            if self.limit is not None and rows_yielded >= self.limit:
                break

            if self.required_columns:
                row = {k: row.get(k) for k in self.required_columns}

            yield row
            rows_yielded += 1

    def __iter__(self):
        """Allow readers to be used directly in for loops"""
        return self.read_lazy()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path})"
