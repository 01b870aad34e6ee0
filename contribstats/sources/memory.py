"""
In-memory contribution store

Holds raw contributions and answers the grouped per-category queries the
same way ``SELECT category, MAX(value) ... GROUP BY category`` would.
"""

import threading
from collections.abc import Iterable

from contribstats.core.models import Contribution
from contribstats.core.types import MetricKind
from contribstats.sources.base import BaseRowSource, Row
from contribstats.utils.aggregates import GroupAggregator, create_aggregator


class InMemoryContributionSource(BaseRowSource):
    """
    Row source backed by a list of contributions

    Grouping uses hash-based aggregation:
    1. Scan all contributions
    2. Group by category (None is its own group)
    3. Maintain one running aggregate per group
    4. Emit one row per group, in first-seen order
    """

    def __init__(self, contributions: Iterable[Contribution] | None = None):
        """
        Initialize store

        Args:
            contributions: Initial contributions; ids are assigned if missing
        """
        self._lock = threading.Lock()
        self._contributions: list[Contribution] = []
        self._next_id = 1
        if contributions is not None:
            self.save_all(contributions)

    def save(self, contribution: Contribution) -> Contribution:
        """
        Store a contribution

        A contribution whose id is already stored replaces the stored one.

        Returns:
            The stored contribution, with an id assigned if it had none
        """
        with self._lock:
            return self._save_locked(contribution)

    def save_all(self, contributions: Iterable[Contribution]) -> list[Contribution]:
        with self._lock:
            return [self._save_locked(c) for c in contributions]

    def _save_locked(self, contribution: Contribution) -> Contribution:
        if contribution.id is None:
            contribution = contribution.with_id(self._next_id)
        self._next_id = max(self._next_id, contribution.id + 1)

        for i, existing in enumerate(self._contributions):
            if existing.id == contribution.id:
                self._contributions[i] = contribution
                return contribution

        self._contributions.append(contribution)
        return contribution

    def find_by_id(self, contribution_id: int) -> Contribution | None:
        with self._lock:
            for contribution in self._contributions:
                if contribution.id == contribution_id:
                    return contribution
        return None

    def find_all(self) -> list[Contribution]:
        with self._lock:
            return list(self._contributions)

    def find_rows(self, metric: MetricKind) -> list[Row]:
        """Group stored contributions by category and aggregate their values"""
        groups: dict[str | None, GroupAggregator] = {}

        for contribution in self.find_all():
            key = contribution.category
            if key not in groups:
                groups[key] = create_aggregator(metric)
            groups[key].update(contribution.value)

        value_field = metric.value_field
        return [
            {"category": category, value_field: aggregator.result()}
            for category, aggregator in groups.items()
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._contributions)

    def __repr__(self) -> str:
        return f"InMemoryContributionSource({len(self)} contributions)"
