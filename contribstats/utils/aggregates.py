"""
Running aggregates for grouping raw contributions

Provides COUNT, SUM, AVG and MAX with SQL semantics: NULL and non-numeric
values are ignored, and SUM/AVG/MAX of a group without any usable value is
NULL (None). NaN counts as NULL, as it does in pandas. Sources use these to
build the pre-grouped rows the per-category aggregator consumes.
"""

import math
from decimal import Decimal
from typing import Any

from contribstats.core.types import MetricKind, NumericKind, classify_numeric


def _usable(value: Any) -> bool:
    kind = classify_numeric(value)
    if kind == NumericKind.FLOAT:
        return not math.isnan(value)
    if kind == NumericKind.DECIMAL:
        return not value.is_nan()
    return kind.is_numeric()


def _add(total: Any, value: Any) -> Any:
    """Add two numbers, falling back to float when Decimal meets a non-int"""
    if isinstance(total, Decimal) != isinstance(value, Decimal):
        other = value if isinstance(total, Decimal) else total
        if not isinstance(other, int):
            return float(total) + float(value)
    return total + value


class GroupAggregator:
    """Base class for running aggregates"""

    def update(self, value: Any) -> None:
        """Update aggregate with a new value"""
        raise NotImplementedError

    def result(self) -> Any:
        """Get final aggregated result"""
        raise NotImplementedError


class CountAggregator(GroupAggregator):
    """COUNT aggregate"""

    def __init__(self, count_star: bool = True):
        """
        Initialize COUNT aggregate

        Args:
            count_star: If True, counts every contribution (COUNT(c))
                       If False, counts numeric values only (COUNT(c.value))
        """
        self.count_star = count_star
        self.count = 0

    def update(self, value: Any) -> None:
        if self.count_star or _usable(value):
            self.count += 1

    def result(self) -> int:
        return self.count


class SumAggregator(GroupAggregator):
    """SUM aggregate"""

    def __init__(self):
        self.sum: int | float | None = None

    def update(self, value: Any) -> None:
        if not _usable(value):
            return

        if self.sum is None:
            self.sum = 0

        self.sum = _add(self.sum, value)

    def result(self) -> int | float | None:
        """Return sum, or None if no usable values"""
        return self.sum


class AvgAggregator(GroupAggregator):
    """AVG aggregate"""

    def __init__(self):
        self.sum = 0
        self.count = 0

    def update(self, value: Any) -> None:
        if not _usable(value):
            return

        self.sum = _add(self.sum, value)
        self.count += 1

    def result(self) -> float | None:
        """Return average, or None if no usable values"""
        if self.count == 0:
            return None
        return float(self.sum / self.count)


class MaxAggregator(GroupAggregator):
    """MAX aggregate"""

    def __init__(self):
        self.max: Any | None = None

    def update(self, value: Any) -> None:
        if not _usable(value):
            return

        if self.max is None or value > self.max:
            self.max = value

    def result(self) -> Any | None:
        """Return maximum value, or None if no usable values"""
        return self.max


def create_aggregator(metric: MetricKind) -> GroupAggregator:
    """
    Factory function to create the running aggregate for a metric

    Args:
        metric: Metric to compute

    Returns:
        GroupAggregator instance

    Raises:
        ValueError: If metric is not recognized
    """
    if metric == MetricKind.COUNT:
        return CountAggregator(count_star=True)
    elif metric == MetricKind.TOTAL:
        return SumAggregator()
    elif metric == MetricKind.AVERAGE:
        return AvgAggregator()
    elif metric == MetricKind.MAX:
        return MaxAggregator()
    else:
        raise ValueError(f"Unknown metric: {metric}")
