"""
Static row source that replays canned rows
"""

from collections.abc import Callable, Sequence

from contribstats.core.types import MetricKind
from contribstats.sources.base import BaseRowSource, Row

RowSupplier = Sequence[Row | None] | Callable[[], Sequence[Row | None]]


class StaticRowSource(BaseRowSource):
    """
    Row source returning pre-supplied rows per metric

    Each metric maps to either a list of rows or a zero-argument callable
    returning one. Callables are invoked on every query, so an exception they
    raise reaches the caller exactly like a failing query would. Metrics
    without rows return an empty list.
    """

    def __init__(self, rows: dict[MetricKind, RowSupplier] | None = None):
        self.rows: dict[MetricKind, RowSupplier] = dict(rows or {})

    @classmethod
    def for_metric(cls, metric: MetricKind, rows: RowSupplier) -> "StaticRowSource":
        return cls({metric: rows})

    def set_rows(self, metric: MetricKind, rows: RowSupplier) -> None:
        self.rows[metric] = rows

    def find_rows(self, metric: MetricKind) -> list[Row | None]:
        supplier = self.rows.get(metric, [])
        if callable(supplier):
            supplier = supplier()
        return list(supplier)

    def __repr__(self) -> str:
        metrics = ", ".join(str(m) for m in self.rows)
        return f"StaticRowSource({metrics})"
