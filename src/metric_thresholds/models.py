"""Threshold models: parsed expressions and threshold definitions."""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from whenever import TimeDelta

from metric_thresholds.methods import percentile_of, validate_method
from metric_thresholds.types import Operator

_DURATION_PART_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)(ms|us|µs|h|m|s)")
_DURATION_RE = re.compile(rf"(?:{_DURATION_PART_RE.pattern})+")

_DURATION_UNITS = {
    "h": "hours",
    "m": "minutes",
    "s": "seconds",
    "ms": "milliseconds",
    "us": "microseconds",
    "µs": "microseconds",
}


class ThresholdExpression(BaseModel):
    """A single ``<method><operator><value>`` condition."""

    model_config = ConfigDict(frozen=True)

    aggregation_method: str
    operator: Operator
    value: float = Field(allow_inf_nan=False)

    @field_validator("aggregation_method")
    @classmethod
    def _validate_method(cls, v: str) -> str:
        return validate_method(v)

    @property
    def percentile(self) -> float | None:
        return percentile_of(self.aggregation_method)

    def serialize(self) -> str:
        return f"{self.aggregation_method}{self.operator.value}{format_value(self.value)}"

    def __str__(self) -> str:
        return self.serialize()


class ThresholdDefinition(BaseModel):
    """One configured threshold, either a bare expression or the long form.

    Long form::

        {"threshold": "p(95)<200", "abortOnFail": true, "delayAbortEval": "10s"}
    """

    model_config = ConfigDict(populate_by_name=True)

    threshold: str
    abort_on_fail: bool = Field(default=False, alias="abortOnFail")
    delay_abort_eval: timedelta | None = Field(default=None, alias="delayAbortEval")

    @model_validator(mode="before")
    @classmethod
    def _from_bare_expression(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"threshold": data}
        return data

    @field_validator("delay_abort_eval", mode="before")
    @classmethod
    def _parse_duration(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_duration(v)
        return v


class ParsedThreshold(BaseModel):
    model_config = ConfigDict(frozen=True)

    metric: str
    source: str
    expression: ThresholdExpression
    abort_on_fail: bool = False
    delay_abort_eval: timedelta | None = None


def parse_duration(text: str) -> timedelta:
    """Parse a Go-style duration such as ``10s``, ``1m30s`` or ``250ms``."""
    text = text.strip()
    if not _DURATION_RE.fullmatch(text):
        raise ValueError(f"invalid duration '{text}', expected e.g. 10s, 1m30s, 250ms")
    total = TimeDelta.ZERO
    for amount, unit in _DURATION_PART_RE.findall(text):
        total += TimeDelta(**{_DURATION_UNITS[unit]: float(amount)})
    return total.to_stdlib()


def format_value(value: float) -> str:
    """Render a threshold value losslessly, dropping ``.0`` from integral values."""
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)
