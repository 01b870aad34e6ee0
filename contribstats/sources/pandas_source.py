"""
Pandas-backed row source

Computes the grouped per-category queries with DataFrame.groupby instead of
Python loops. Falls back gracefully if pandas is not available.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

try:
    import pandas as pd

    PANDAS_AVAILABLE = True
except ImportError:
    PANDAS_AVAILABLE = False
    pd = None

from contribstats.core.models import Contribution
from contribstats.core.types import MetricKind, classify_numeric
from contribstats.sources.base import BaseRowSource, Row


class DataFrameRowSource(BaseRowSource):
    """
    Row source over a pandas DataFrame of raw contributions

    Translates each metric to a groupby reduction on the value column:
    - MAX → max()
    - AVERAGE → mean()
    - TOTAL → sum(min_count=1)
    - COUNT → size()

    Values that are not numbers (text, bools) are ignored like NULLs. Groups
    keep first-seen order and a missing category is its own group.
    """

    def __init__(
        self,
        df: pd.DataFrame,
        category_column: str = "category",
        value_column: str = "value",
    ):
        """
        Initialize source

        Args:
            df: DataFrame with one row per contribution
            category_column: Column to group by
            value_column: Column holding contribution values
        """
        if not PANDAS_AVAILABLE:
            raise ImportError(
                "Pandas backend requires pandas library. "
                "Install it with `pip install pandas`"
            )

        missing = [c for c in (category_column, value_column) if c not in df.columns]
        if missing and not df.empty:
            raise ValueError(f"DataFrame is missing columns: {', '.join(missing)}")

        self.df = df
        self.category_column = category_column
        self.value_column = value_column

    @classmethod
    def from_contributions(cls, contributions: Iterable[Contribution]) -> DataFrameRowSource:
        """Build a source from contribution records"""
        if not PANDAS_AVAILABLE:
            raise ImportError(
                "Pandas backend requires pandas library. "
                "Install it with `pip install pandas`"
            )

        records = [c.to_dict() for c in contributions]
        df = pd.DataFrame(records, columns=["id", "team_name", "category", "value"])
        return cls(df)

    def find_rows(self, metric: MetricKind) -> list[Row]:
        if self.df.empty:
            return []

        # Only values that count as numbers take part; text and bools become NaN
        raw = self.df[self.value_column]
        values = pd.to_numeric(raw.where(raw.map(_is_number), None), errors="coerce")
        grouped = values.groupby(self.df[self.category_column], dropna=False, sort=False)

        if metric == MetricKind.COUNT:
            series = grouped.size()
        elif metric == MetricKind.TOTAL:
            series = grouped.sum(min_count=1)
        elif metric == MetricKind.AVERAGE:
            series = grouped.mean()
        elif metric == MetricKind.MAX:
            series = grouped.max()
        else:
            raise ValueError(f"Unknown metric: {metric}")

        value_field = metric.value_field
        return [
            {"category": _to_python(category), value_field: _to_python(value)}
            for category, value in series.items()
        ]

    def __repr__(self) -> str:
        return f"DataFrameRowSource({len(self.df)} rows)"


def _to_python(value: Any) -> Any:
    """Convert numpy scalars to Python values and NaN to None"""
    if value is None or pd.isna(value):
        return None
    if hasattr(value, "item"):
        return value.item()
    return value


def _is_number(value: Any) -> bool:
    return classify_numeric(value).is_numeric()
