"""Unit tests for parse_expression and parse_value."""

import pytest

from metric_thresholds.errors import (
    ScanError,
    ThresholdParseError,
    UnknownMethodError,
    ValueParseError,
)
from metric_thresholds.models import ThresholdExpression
from metric_thresholds.parser import parse_expression, parse_value
from metric_thresholds.types import Operator


class TestParseExpression:
    def test_count_expression(self):
        expr = parse_expression("count>20")
        assert expr == ThresholdExpression(aggregation_method="count", operator=">", value=20)
        assert expr.operator is Operator.GT
        assert expr.value == 20.0

    def test_percentile_expression(self):
        expr = parse_expression("p(99.9)<500")
        assert expr.aggregation_method == "p(99.9)"
        assert expr.operator == "<"
        assert expr.value == 500.0

    def test_rate_expression(self):
        expr = parse_expression("rate<0.05")
        assert expr.aggregation_method == "rate"
        assert expr.value == 0.05

    def test_whitespace_around_tokens(self):
        assert parse_expression("  avg  <=  200 ") == parse_expression("avg<=200")

    @pytest.mark.parametrize(
        ("raw", "error"),
        [
            ("count!20", ScanError),
            ("count=20", ScanError),
            ("foo>20", UnknownMethodError),
            ("p(99<20", UnknownMethodError),
            (">20", UnknownMethodError),
            ("count>abc", ValueParseError),
            ("count>", ValueParseError),
        ],
    )
    def test_failures(self, raw, error):
        with pytest.raises(error):
            parse_expression(raw)

    def test_errors_carry_full_expression(self):
        with pytest.raises(ValueParseError) as exc_info:
            parse_expression("count>abc")
        err = exc_info.value
        assert err.expression == "count>abc"
        assert err.token == "abc"
        assert "count>abc" in str(err)

    def test_unknown_method_names_token(self):
        with pytest.raises(UnknownMethodError) as exc_info:
            parse_expression("foo>20")
        assert exc_info.value.token == "foo"
        assert exc_info.value.expression == "foo>20"

    def test_scan_error_is_chained(self):
        with pytest.raises(ScanError) as exc_info:
            parse_expression("count!20")
        assert exc_info.value.expression == "count!20"
        assert isinstance(exc_info.value.__cause__, ScanError)
        assert exc_info.value.__cause__.expression is None

    def test_all_errors_are_value_errors(self):
        for raw in ("count!20", "foo>20", "count>abc"):
            with pytest.raises(ThresholdParseError):
                parse_expression(raw)
            with pytest.raises(ValueError):
                parse_expression(raw)


class TestParseValue:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("20", 20.0),
            ("0.05", 0.05),
            ("-1.5", -1.5),
            ("+3", 3.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("1e3", 1000.0),
            ("2.5E-2", 0.025),
        ],
    )
    def test_numeric_literals(self, token, expected):
        assert parse_value(token) == expected

    @pytest.mark.parametrize(
        "token",
        ["", "abc", "1.2.3", "inf", "-inf", "nan", "Infinity", "1_000", "0x10", "1e999", "1 0"],
    )
    def test_rejected_literals(self, token):
        with pytest.raises(ValueParseError):
            parse_value(token)
