"""Expression builder: turns a threshold expression string into a ThresholdExpression.

The pipeline:
1. Scan the raw string into method, operator and value tokens
2. Validate the aggregation method (literal name or ``p(N)``)
3. Parse the value token as a finite base-10 float
4. Assemble the frozen ThresholdExpression

Every failure is re-raised with the full expression attached.
"""

from __future__ import annotations

import math
import re

from metric_thresholds.errors import ScanError, UnknownMethodError, ValueParseError
from metric_thresholds.methods import validate_method
from metric_thresholds.models import ThresholdExpression
from metric_thresholds.scanner import scan
from metric_thresholds.types import Operator

# float() alone would also accept "inf", "nan" and "1_000".
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_value(token: str) -> float:
    """Parse a threshold value. Raises ``ValueParseError`` unless finite."""
    if not _NUMBER_RE.fullmatch(token):
        raise ValueParseError(token)
    value = float(token)
    if not math.isfinite(value):
        raise ValueParseError(token)
    return value


def parse_expression(raw: str) -> ThresholdExpression:
    """Parse a single threshold expression such as ``count>20`` or ``p(99.9)<500``."""
    try:
        method_token, operator_token, value_token = scan(raw)
    except ScanError as e:
        raise e.with_expression(raw) from e

    try:
        method = validate_method(method_token)
    except UnknownMethodError as e:
        raise e.with_expression(raw) from e

    try:
        value = parse_value(value_token)
    except ValueParseError as e:
        raise e.with_expression(raw) from e

    return ThresholdExpression(
        aggregation_method=method,
        operator=Operator(operator_token),
        value=value,
    )
