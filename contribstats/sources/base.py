"""
Base row source interface

A row source plays the part of the query layer: it returns rows that are
already grouped by category, one query per metric, for the aggregator to
validate and collect.
"""

from collections.abc import Mapping
from typing import Any

from contribstats.core.models import CategoryMax
from contribstats.core.types import MetricKind

Row = Mapping[str, Any]


class BaseRowSource:
    """
    Base class for all row sources

    Sources are responsible for:
    1. Producing one row per category for a metric
    2. Naming the value field after the metric (``maxValue``, ``avgValue``, ...)
    3. Letting their own failures propagate to the caller

    Subclasses implement find_rows(); the per-metric queries dispatch to it.
    """

    def find_rows(self, metric: MetricKind) -> list[Row]:
        """
        Return grouped rows for a metric

        Args:
            metric: Metric to query

        Returns:
            List of rows with ``category`` and ``metric.value_field`` keys;
            empty list if there is no data

        Example:
            [{'category': 'Engineering', 'maxValue': 42}]
        """
        raise NotImplementedError("Subclasses must implement find_rows()")

    def find_max_per_category(self) -> list[Row]:
        return self.find_rows(MetricKind.MAX)

    def find_avg_per_category(self) -> list[Row]:
        return self.find_rows(MetricKind.AVERAGE)

    def find_total_per_category(self) -> list[Row]:
        return self.find_rows(MetricKind.TOTAL)

    def find_count_per_category(self) -> list[Row]:
        return self.find_rows(MetricKind.COUNT)

    def find_max_per_category_typed(self) -> list[CategoryMax]:
        """
        Return MAX rows as typed projections

        Null fields are kept as None; callers decide what to do with them.
        A row that is itself None becomes a projection with both fields None.
        """
        value_field = MetricKind.MAX.value_field
        projections = []
        for row in self.find_max_per_category():
            if row is None:
                projections.append(CategoryMax(None, None))
            else:
                projections.append(CategoryMax(row.get("category"), row.get(value_field)))
        return projections

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
