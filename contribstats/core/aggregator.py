"""
Per-category aggregator

Turns rows that an upstream query already grouped by category into a
``{category: value}`` mapping for one metric, validating each row on the way.

Example:
    >>> rows = [{"category": "Eng", "maxValue": 50}, {"category": "Eng", "maxValue": 75}]
    >>> max_per_category(rows)
    {'Eng': 75}
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from contribstats.core.types import (
    MetricKind,
    NullHandling,
    can_coerce,
    classify_numeric,
    coerce_numeric,
)

CATEGORY_FIELD = "category"


class RowProblem(Enum):
    """Reasons a row is rejected"""

    NULL_FIELD = "NULL_FIELD"
    NOT_NUMERIC = "NOT_NUMERIC"
    CATEGORY_NOT_TEXT = "CATEGORY_NOT_TEXT"


class InvalidRowError(ValueError):
    """Raised under THROW_ON_NULL when a row cannot be aggregated"""

    def __init__(
        self,
        message: str,
        reason: RowProblem,
        row: Mapping[str, Any] | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.row = row
        self.value = value


@dataclass(frozen=True)
class RowCheck:
    """Outcome of validating a single row"""

    category: str | None = None
    value: int | float | None = None
    problem: RowProblem | None = None
    message: str | None = None
    offending: Any = None

    @property
    def ok(self) -> bool:
        return self.problem is None


class Aggregator:
    """
    Builds a per-category mapping for one metric

    Each row carries a precomputed aggregate for its category, so rows are
    never merged: when a category repeats, the last valid row wins.

    The aggregator holds no state between calls; one instance can be shared
    across threads.
    """

    def __init__(self, metric: MetricKind, mode: NullHandling = NullHandling.SKIP_NULLS):
        """
        Initialize aggregator

        Args:
            metric: Metric whose value field is read and whose type values are coerced to
            mode: What to do with invalid rows (default: skip them)
        """
        self.metric = metric
        self.mode = mode
        self.value_field = metric.value_field

    def check_row(self, row: Mapping[str, Any] | None) -> RowCheck:
        """
        Validate a row without raising

        Args:
            row: Input row (missing keys and a ``None`` row count as nulls)

        Returns:
            RowCheck with the category and coerced value, or the problem found
        """
        category = row.get(CATEGORY_FIELD) if row is not None else None
        raw_value = row.get(self.value_field) if row is not None else None

        if category is None or raw_value is None:
            return RowCheck(
                problem=RowProblem.NULL_FIELD,
                message=(
                    f"Null category or {self.value_field} encountered in "
                    f"repository result: {row}"
                ),
                offending=row,
            )

        if not isinstance(category, str):
            return RowCheck(
                problem=RowProblem.CATEGORY_NOT_TEXT,
                message=f"category is not text: {category!r}",
                offending=category,
            )

        kind = classify_numeric(raw_value)
        target = self.metric.target_type
        if not can_coerce(raw_value, kind, target):
            return RowCheck(
                problem=RowProblem.NOT_NUMERIC,
                message=f"{self.value_field} is not numeric: {raw_value}",
                offending=raw_value,
            )

        return RowCheck(category=category, value=coerce_numeric(raw_value, kind, target))

    def aggregate(self, rows: Iterable[Mapping[str, Any] | None]) -> dict[str, int | float]:
        """
        Aggregate rows into a category mapping

        Args:
            rows: Rows in upstream order

        Returns:
            Mapping from category to coerced value (empty if nothing was valid)

        Raises:
            InvalidRowError: On the first invalid row when mode is THROW_ON_NULL
        """
        result: dict[str, int | float] = {}

        for row in rows:
            check = self.check_row(row)

            if not check.ok:
                if self.mode == NullHandling.THROW_ON_NULL:
                    raise self._error_for(check, row)
                # SKIP_NULLS
                continue

            result[check.category] = check.value

        return result

    def _error_for(self, check: RowCheck, row: Mapping[str, Any] | None) -> InvalidRowError:
        value = None if check.problem == RowProblem.NULL_FIELD else check.offending
        return InvalidRowError(check.message, check.problem, row=row, value=value)

    def __repr__(self) -> str:
        return f"Aggregator(metric={self.metric}, mode={self.mode})"


def aggregate(
    rows: Iterable[Mapping[str, Any] | None],
    metric: MetricKind,
    mode: NullHandling = NullHandling.SKIP_NULLS,
) -> dict[str, int | float]:
    """
    Aggregate pre-grouped rows for a metric

    Args:
        rows: Rows carrying ``category`` and the metric's value field
        metric: Metric to compute
        mode: Null handling policy (default: SKIP_NULLS)

    Returns:
        Mapping from category to value
    """
    return Aggregator(metric, mode).aggregate(rows)


def max_per_category(
    rows: Iterable[Mapping[str, Any] | None], mode: NullHandling = NullHandling.SKIP_NULLS
) -> dict[str, int]:
    """Read ``maxValue`` per category as integers"""
    return aggregate(rows, MetricKind.MAX, mode)


def average_per_category(
    rows: Iterable[Mapping[str, Any] | None], mode: NullHandling = NullHandling.SKIP_NULLS
) -> dict[str, float]:
    """Read ``avgValue`` per category as floats"""
    return aggregate(rows, MetricKind.AVERAGE, mode)


def total_per_category(
    rows: Iterable[Mapping[str, Any] | None], mode: NullHandling = NullHandling.SKIP_NULLS
) -> dict[str, int]:
    """Read ``totalValue`` per category as integers"""
    return aggregate(rows, MetricKind.TOTAL, mode)


def count_per_category(
    rows: Iterable[Mapping[str, Any] | None], mode: NullHandling = NullHandling.SKIP_NULLS
) -> dict[str, int]:
    """Read ``countValue`` per category as integers"""
    return aggregate(rows, MetricKind.COUNT, mode)
