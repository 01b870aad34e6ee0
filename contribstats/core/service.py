"""
Contribution service - user-facing interface for per-category metrics

Wires a row source to the aggregator. The source runs the grouped queries,
the aggregator applies the null-handling policy.

Example:
    >>> from contribstats import ContributionService, InMemoryContributionSource
    >>> service = ContributionService(InMemoryContributionSource())
    >>> service.get_max_contribution_per_category()
    {}
"""

from contribstats.core.aggregator import Aggregator
from contribstats.core.models import Contribution
from contribstats.core.types import MetricKind, NullHandling
from contribstats.sources.base import BaseRowSource
from contribstats.sources.memory import InMemoryContributionSource


class ContributionService:
    """
    Per-category contribution metrics over a row source

    Every metric method defaults to SKIP_NULLS. Errors raised by the source
    are not caught or retried.
    """

    def __init__(self, source: BaseRowSource):
        """
        Initialize service

        Args:
            source: Row source answering the grouped queries
        """
        self.source = source

    # Storage passthrough

    def save(self, contribution: Contribution) -> Contribution:
        return self._store().save(contribution)

    def find_by_id(self, contribution_id: int) -> Contribution | None:
        return self._store().find_by_id(contribution_id)

    def find_all(self) -> list[Contribution]:
        return self._store().find_all()

    def _store(self) -> InMemoryContributionSource:
        if not isinstance(self.source, InMemoryContributionSource):
            raise TypeError(
                f"{self.source.__class__.__name__} does not store contributions"
            )
        return self.source

    # Metrics

    def get_max_contribution_per_category(
        self, handling: NullHandling = NullHandling.SKIP_NULLS
    ) -> dict[str, int]:
        rows = self.source.find_max_per_category()
        return Aggregator(MetricKind.MAX, handling).aggregate(rows)

    def get_average_contribution_per_category(
        self, handling: NullHandling = NullHandling.SKIP_NULLS
    ) -> dict[str, float]:
        rows = self.source.find_avg_per_category()
        return Aggregator(MetricKind.AVERAGE, handling).aggregate(rows)

    def get_total_contribution_per_category(
        self, handling: NullHandling = NullHandling.SKIP_NULLS
    ) -> dict[str, int]:
        rows = self.source.find_total_per_category()
        return Aggregator(MetricKind.TOTAL, handling).aggregate(rows)

    def get_count_per_category(
        self, handling: NullHandling = NullHandling.SKIP_NULLS
    ) -> dict[str, int]:
        rows = self.source.find_count_per_category()
        return Aggregator(MetricKind.COUNT, handling).aggregate(rows)

    def get_max_contribution_per_category_from_typed(self) -> dict[str, int]:
        """
        MAX per category from typed projections

        Values are taken as the source typed them. Entries with a null field
        are always skipped and the last entry for a category wins.
        """
        result: dict[str, int] = {}
        for entry in self.source.find_max_per_category_typed():
            if entry is None or entry.category is None or entry.max_value is None:
                continue
            result[entry.category] = entry.max_value
        return result

    def get_metric(
        self, metric: MetricKind, handling: NullHandling = NullHandling.SKIP_NULLS
    ) -> dict[str, int | float]:
        """Compute a single metric chosen at runtime"""
        return Aggregator(metric, handling).aggregate(self.source.find_rows(metric))

    def get_metrics(
        self, handling: NullHandling = NullHandling.SKIP_NULLS
    ) -> dict[MetricKind, dict[str, int | float]]:
        """Compute all four metrics, each from its own query"""
        return {metric: self.get_metric(metric, handling) for metric in MetricKind}

    def __repr__(self) -> str:
        return f"ContributionService(source={self.source!r})"
