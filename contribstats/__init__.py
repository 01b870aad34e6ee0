"""
contribstats - per-category contribution metrics

Computes maximum, average, total and count per category from rows an upstream
query already grouped, skipping or rejecting malformed rows according to a
caller-selected policy.
"""

__version__ = "0.1.0"

# Main API
from contribstats.core.aggregator import (
    Aggregator,
    InvalidRowError,
    RowProblem,
    aggregate,
    average_per_category,
    count_per_category,
    max_per_category,
    total_per_category,
)
from contribstats.core.models import CategoryMax, Contribution
from contribstats.core.service import ContributionService
from contribstats.core.types import MetricKind, NullHandling
from contribstats.sources.memory import InMemoryContributionSource
from contribstats.sources.static import StaticRowSource

__all__ = [
    "__version__",
    "Aggregator",
    "CategoryMax",
    "Contribution",
    "ContributionService",
    "InMemoryContributionSource",
    "InvalidRowError",
    "MetricKind",
    "NullHandling",
    "RowProblem",
    "StaticRowSource",
    "aggregate",
    "average_per_category",
    "count_per_category",
    "max_per_category",
    "total_per_category",
]
