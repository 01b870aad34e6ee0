"""
Tests for metric enums, numeric classification and coercion
"""

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from contribstats.core.types import (
    MetricKind,
    NullHandling,
    NumericKind,
    can_coerce,
    classify_numeric,
    coerce_numeric,
    infer_type_from_string,
)


class TestMetricKind:
    """Test MetricKind enum"""

    @pytest.mark.parametrize(
        "metric,field,target",
        [
            (MetricKind.MAX, "maxValue", int),
            (MetricKind.AVERAGE, "avgValue", float),
            (MetricKind.TOTAL, "totalValue", int),
            (MetricKind.COUNT, "countValue", int),
        ],
    )
    def test_value_field_and_target(self, metric, field, target):
        assert metric.value_field == field
        assert metric.target_type is target
        assert metric.is_integral() == (target is int)

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("max", MetricKind.MAX),
            ("AVG", MetricKind.AVERAGE),
            ("average", MetricKind.AVERAGE),
            ("sum", MetricKind.TOTAL),
            (" total ", MetricKind.TOTAL),
            ("Count", MetricKind.COUNT),
        ],
    )
    def test_from_name(self, name, expected):
        assert MetricKind.from_name(name) == expected

    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="Unknown metric: median"):
            MetricKind.from_name("median")

    def test_str(self):
        assert str(MetricKind.AVERAGE) == "AVERAGE"


class TestNullHandling:
    """Test NullHandling enum"""

    def test_strictness(self):
        assert NullHandling.THROW_ON_NULL.is_strict
        assert not NullHandling.SKIP_NULLS.is_strict

    def test_str(self):
        assert str(NullHandling.SKIP_NULLS) == "SKIP_NULLS"


class TestClassifyNumeric:
    """Test classify_numeric type switch"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (42, NumericKind.INTEGER),
            (-(2**70), NumericKind.INTEGER),
            (40.5, NumericKind.FLOAT),
            (float("nan"), NumericKind.FLOAT),
            (Decimal("1.5"), NumericKind.DECIMAL),
            (Fraction(1, 3), NumericKind.FLOAT),
            (None, NumericKind.NOT_NUMERIC),
            ("42", NumericKind.NOT_NUMERIC),
            (True, NumericKind.NOT_NUMERIC),
            (False, NumericKind.NOT_NUMERIC),
            ([1], NumericKind.NOT_NUMERIC),
            (1 + 2j, NumericKind.NOT_NUMERIC),
        ],
    )
    def test_classify(self, value, expected):
        assert classify_numeric(value) == expected

    def test_numpy_scalars(self):
        np = pytest.importorskip("numpy")
        assert classify_numeric(np.int32(1)) == NumericKind.INTEGER
        assert classify_numeric(np.int64(1)) == NumericKind.INTEGER
        assert classify_numeric(np.float32(1.5)) == NumericKind.FLOAT
        assert classify_numeric(np.bool_(True)) == NumericKind.NOT_NUMERIC

    def test_is_numeric(self):
        assert NumericKind.DECIMAL.is_numeric()
        assert not NumericKind.NOT_NUMERIC.is_numeric()


class TestCoercion:
    """Test truncating coercion"""

    @pytest.mark.parametrize(
        "value,expected",
        [(40.5, 40), (-40.5, -40), (0.999, 0), (Decimal("7.9"), 7), (12, 12)],
    )
    def test_truncate_to_int(self, value, expected):
        result = coerce_numeric(value, classify_numeric(value), int)
        assert result == expected
        assert type(result) is int

    def test_to_float(self):
        result = coerce_numeric(3, NumericKind.INTEGER, float)
        assert result == 3.0
        assert type(result) is float

    def test_non_finite_to_int(self):
        nan = float("nan")
        assert can_coerce(nan, NumericKind.FLOAT, int)
        assert coerce_numeric(nan, NumericKind.FLOAT, int) == 0
        assert coerce_numeric(float("inf"), NumericKind.FLOAT, int) == 2**63 - 1
        assert coerce_numeric(float("-inf"), NumericKind.FLOAT, int) == -(2**63)
        assert coerce_numeric(Decimal("NaN"), NumericKind.DECIMAL, int) == 0
        assert coerce_numeric(Decimal("-Infinity"), NumericKind.DECIMAL, int) == -(2**63)

    def test_non_finite_to_float(self):
        assert math.isnan(coerce_numeric(float("nan"), NumericKind.FLOAT, float))
        assert coerce_numeric(float("inf"), NumericKind.FLOAT, float) == float("inf")

    def test_not_numeric(self):
        assert not can_coerce("x", NumericKind.NOT_NUMERIC, float)

        with pytest.raises(ValueError, match="Cannot convert"):
            coerce_numeric("x", NumericKind.NOT_NUMERIC, int)


class TestInferTypeFromString:
    """Test reader value inference"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("42", 42),
            (" -7 ", -7),
            ("40.5", 40.5),
            ("1e3", 1000.0),
            ("", None),
            ("   ", None),
            ("n/a", "n/a"),
            ("nan", "nan"),
            ("Engineering", "Engineering"),
        ],
    )
    def test_infer(self, text, expected):
        assert infer_type_from_string(text) == expected

    def test_non_string_passthrough(self):
        assert infer_type_from_string(5) == 5
