"""Type system for contribstats.

This module provides the metric and null-handling enums, numeric classification
and the truncating coercion used by the aggregator, plus string value inference
for file readers.
"""

import math
import numbers
from decimal import Decimal
from enum import Enum
from typing import Any


class MetricKind(Enum):
    """Per-category metrics supported by contribstats."""

    MAX = "MAX"
    AVERAGE = "AVERAGE"
    TOTAL = "TOTAL"
    COUNT = "COUNT"

    def __str__(self) -> str:
        return self.value

    @property
    def value_field(self) -> str:
        """Name of the row field holding this metric's value."""
        return _VALUE_FIELDS[self]

    @property
    def target_type(self) -> type:
        """Python type every accepted value is coerced to."""
        return float if self == MetricKind.AVERAGE else int

    def is_integral(self) -> bool:
        """Check if results of this metric are integers."""
        return self.target_type is int

    @classmethod
    def from_name(cls, name: str) -> "MetricKind":
        """Resolve a metric from a user-supplied name.

        Accepts the enum names plus the short aliases used on the command
        line (``max``, ``avg``, ``total``/``sum``, ``count``).

        Raises:
            ValueError: If the name is not recognized
        """
        key = name.strip().upper()
        if key in _ALIASES:
            return _ALIASES[key]
        available = ", ".join(sorted(a.lower() for a in _ALIASES))
        raise ValueError(f"Unknown metric: {name}. Available metrics: {available}")


_VALUE_FIELDS = {
    MetricKind.MAX: "maxValue",
    MetricKind.AVERAGE: "avgValue",
    MetricKind.TOTAL: "totalValue",
    MetricKind.COUNT: "countValue",
}

_ALIASES = {
    "MAX": MetricKind.MAX,
    "AVG": MetricKind.AVERAGE,
    "AVERAGE": MetricKind.AVERAGE,
    "TOTAL": MetricKind.TOTAL,
    "SUM": MetricKind.TOTAL,
    "COUNT": MetricKind.COUNT,
}


class NullHandling(Enum):
    """Policy for rows with a null category, a null value or a non-numeric value."""

    # Drop the row and keep going
    SKIP_NULLS = "SKIP_NULLS"
    # Abort the whole call on the first such row
    THROW_ON_NULL = "THROW_ON_NULL"

    def __str__(self) -> str:
        return self.value

    @property
    def is_strict(self) -> bool:
        return self == NullHandling.THROW_ON_NULL


class NumericKind(Enum):
    """Closed set of numeric representations a row value may have."""

    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    DECIMAL = "DECIMAL"
    NOT_NUMERIC = "NOT_NUMERIC"

    def __str__(self) -> str:
        return self.value

    def is_numeric(self) -> bool:
        return self != NumericKind.NOT_NUMERIC


def classify_numeric(value: Any) -> NumericKind:
    """Classify a value into one of the supported numeric representations.

    ``bool`` is not numeric even though it subclasses ``int``, and neither are
    strings that happen to look like numbers. Integral and real numpy scalars
    register with the ``numbers`` ABCs and classify as INTEGER and FLOAT.

    Args:
        value: Any value read from a row (``None`` is not numeric)

    Returns:
        The matching NumericKind

    Examples:
        >>> classify_numeric(42)
        NumericKind.INTEGER
        >>> classify_numeric(40.5)
        NumericKind.FLOAT
        >>> classify_numeric("42")
        NumericKind.NOT_NUMERIC
    """
    if isinstance(value, bool):
        return NumericKind.NOT_NUMERIC

    if isinstance(value, numbers.Integral):
        return NumericKind.INTEGER

    if isinstance(value, Decimal):
        return NumericKind.DECIMAL

    if isinstance(value, numbers.Real):
        return NumericKind.FLOAT

    return NumericKind.NOT_NUMERIC


# 64-bit bounds that infinite values saturate to
INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)


def can_coerce(value: Any, kind: NumericKind, target: type) -> bool:
    """Check if a classified value can be converted to the target type.

    Every numeric kind converts to both ``int`` and ``float``; non-finite
    values are handled by :func:`coerce_numeric`.
    """
    return kind.is_numeric() and target in (int, float)


def coerce_numeric(value: Any, kind: NumericKind, target: type) -> int | float:
    """Convert a numeric value to the target type, truncating toward zero.

    For an ``int`` target, NaN becomes ``0`` and infinities saturate to the
    64-bit integer bounds. A ``float`` target keeps them as they are.

    Args:
        value: Value already classified as ``kind``
        kind: Result of :func:`classify_numeric` for ``value``
        target: ``int`` or ``float``

    Returns:
        The converted value (``40.5 -> 40``, ``-40.5 -> -40``, ``nan -> 0``)

    Raises:
        ValueError: If the value cannot be converted (see :func:`can_coerce`)
    """
    if not can_coerce(value, kind, target):
        raise ValueError(f"Cannot convert {value!r} to {target.__name__}")

    if target is int:
        if kind == NumericKind.DECIMAL:
            if value.is_nan():
                return 0
            if value.is_infinite():
                return INT64_MAX if value > 0 else INT64_MIN
        elif kind == NumericKind.FLOAT:
            if math.isnan(value):
                return 0
            if math.isinf(value):
                return INT64_MAX if value > 0 else INT64_MIN

        # int() truncates floats and Decimals toward zero
        return int(value)

    return float(value)


def infer_type_from_string(value: str) -> Any:
    """Parse a string value and return the typed Python value.

    This is used by readers to convert text cells into numbers. Only integers
    and floats are recognized; everything else stays a string.

    Args:
        value: String value to parse

    Returns:
        ``int``, ``float``, the input string, or ``None`` for blank cells

    Examples:
        >>> infer_type_from_string("42")
        42
        >>> infer_type_from_string("40.5")
        40.5
        >>> infer_type_from_string("n/a")
        'n/a'
    """
    if not isinstance(value, str):
        return value

    value_stripped = value.strip()

    # Empty → None
    if not value_stripped:
        return None

    # Integer
    try:
        return int(value_stripped)
    except ValueError:
        pass

    # Float ("nan"/"inf" stay text)
    try:
        parsed = float(value_stripped)
        if math.isfinite(parsed):
            return parsed
    except ValueError:
        pass

    return value
