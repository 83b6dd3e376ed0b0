"""Aggregation method validation and per-metric-type method support."""

from __future__ import annotations

import re

from metric_thresholds.errors import UnknownMethodError, UnsupportedMethodError
from metric_thresholds.types import AggregationMethod, MetricType

PERCENTILE_PLACEHOLDER = "p(N)"

# Non-negative integer or decimal, no sign, exponent or whitespace.
_PERCENTILE_RE = re.compile(r"p\((?P<number>[0-9]+(?:\.[0-9]+)?)\)")

_LITERAL_METHODS: frozenset[str] = frozenset(m.value for m in AggregationMethod)

SUPPORTED_METHODS: dict[MetricType, tuple[str, ...]] = {
    MetricType.COUNTER: (AggregationMethod.COUNT, AggregationMethod.RATE),
    MetricType.GAUGE: (AggregationMethod.VALUE,),
    MetricType.RATE: (AggregationMethod.RATE,),
    MetricType.TREND: (
        AggregationMethod.AVG,
        AggregationMethod.MIN,
        AggregationMethod.MAX,
        AggregationMethod.MED,
        PERCENTILE_PLACEHOLDER,
    ),
}


def validate_method(token: str) -> str:
    """Return ``token`` unchanged if it names a valid aggregation method.

    Percentile tokens keep their original digits, so ``p(99)`` and ``p(99.0)``
    stay distinct. Raises ``UnknownMethodError`` for anything else.
    """
    if token in _LITERAL_METHODS:
        return token
    if _PERCENTILE_RE.fullmatch(token):
        return token
    raise UnknownMethodError(token)


def is_percentile(method: str) -> bool:
    return _PERCENTILE_RE.fullmatch(method) is not None


def percentile_of(method: str) -> float | None:
    """Numeric argument of a ``p(N)`` method, or ``None`` for other methods."""
    match = _PERCENTILE_RE.fullmatch(method)
    if match is None:
        return None
    return float(match.group("number"))


def supported_methods(metric_type: MetricType | str) -> tuple[str, ...]:
    return tuple(str(m) for m in SUPPORTED_METHODS[MetricType(metric_type)])


def check_method_supported(method: str, metric_type: MetricType | str) -> None:
    """Raise ``UnsupportedMethodError`` if ``method`` does not apply to ``metric_type``."""
    metric_type = MetricType(metric_type)
    supported = supported_methods(metric_type)
    candidate = PERCENTILE_PLACEHOLDER if is_percentile(method) else method
    if candidate not in supported:
        raise UnsupportedMethodError(method, metric_type.value, supported)
