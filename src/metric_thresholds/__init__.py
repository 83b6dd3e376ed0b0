"""Threshold expression parsing for metric SLO checks.

Quick Start:
    from metric_thresholds import parse_expression

    expr = parse_expression("p(99.9)<500")
    expr.aggregation_method  # "p(99.9)"
    expr.operator            # Operator.LT
    expr.value               # 500.0
"""

from metric_thresholds.errors import (
    ScanError,
    ThresholdConfigError,
    ThresholdParseError,
    UnknownMethodError,
    UnsupportedMethodError,
    ValueParseError,
)
from metric_thresholds.loader import load_thresholds_file, parse_thresholds
from metric_thresholds.methods import check_method_supported, supported_methods, validate_method
from metric_thresholds.models import ParsedThreshold, ThresholdDefinition, ThresholdExpression
from metric_thresholds.parser import parse_expression, parse_value
from metric_thresholds.scanner import scan
from metric_thresholds.types import AggregationMethod, MetricType, Operator

__version__ = "0.1.0"

__all__ = [
    "AggregationMethod",
    "MetricType",
    "Operator",
    "ParsedThreshold",
    "ScanError",
    "ThresholdConfigError",
    "ThresholdDefinition",
    "ThresholdExpression",
    "ThresholdParseError",
    "UnknownMethodError",
    "UnsupportedMethodError",
    "ValueParseError",
    "check_method_supported",
    "load_thresholds_file",
    "parse_expression",
    "parse_thresholds",
    "parse_value",
    "scan",
    "supported_methods",
    "validate_method",
]
