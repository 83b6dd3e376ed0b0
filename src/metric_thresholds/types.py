"""Operator, aggregation method, and metric type enums."""

from enum import StrEnum


class Operator(StrEnum):
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    EQ = "=="
    STRICT_EQ = "==="
    NEQ = "!="


class AggregationMethod(StrEnum):
    """Fixed aggregation method names. Percentiles use the ``p(N)`` form instead."""

    COUNT = "count"
    RATE = "rate"
    VALUE = "value"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    MED = "med"


class MetricType(StrEnum):
    COUNTER = "counter"
    GAUGE = "gauge"
    RATE = "rate"
    TREND = "trend"


# Scan order: at any position, longer operators win over their prefixes.
OPERATOR_SCAN_ORDER: tuple[Operator, ...] = (
    Operator.LTE,
    Operator.GTE,
    Operator.STRICT_EQ,
    Operator.EQ,
    Operator.NEQ,
    Operator.LT,
    Operator.GT,
)
