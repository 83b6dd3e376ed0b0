"""Threshold loader — parses every threshold of a configuration at load time.

A thresholds configuration maps metric names (optionally with a ``{tag:value}``
selector) to one or more definitions::

    http_req_duration:
      - "p(95)<200"
      - threshold: "p(99)<500"
        abortOnFail: true
        delayAbortEval: 10s
    http_req_failed: "rate<0.01"

All failures are collected so a broken configuration is reported in one pass.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from metric_thresholds.errors import (
    ThresholdConfigError,
    ThresholdParseError,
    UnsupportedMethodError,
)
from metric_thresholds.methods import check_method_supported
from metric_thresholds.models import ParsedThreshold, ThresholdDefinition
from metric_thresholds.parser import parse_expression
from metric_thresholds.types import MetricType

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger("metric_thresholds.loader")


def base_metric_name(metric: str) -> str:
    """Strip a ``{tag:value}`` selector: ``http_req_duration{status:200}`` → ``http_req_duration``."""
    return metric.split("{", 1)[0].strip()


def parse_thresholds(
    config: Mapping[str, Any],
    *,
    metric_types: Mapping[str, MetricType | str] | None = None,
) -> dict[str, list[ParsedThreshold]]:
    """Parse every threshold in ``config``.

    When ``metric_types`` knows a metric's base name, each expression's
    aggregation method is also checked against that metric type.
    Raises ``ThresholdConfigError`` listing every failure.
    """
    types = {name: MetricType(t) for name, t in (metric_types or {}).items()}
    parsed: dict[str, list[ParsedThreshold]] = {}
    errors: list[str] = []

    for metric, raw_definitions in config.items():
        if not isinstance(metric, str):
            errors.append(f"{metric!r}: metric name must be a string")
            continue
        if isinstance(raw_definitions, (str, Mapping)):
            raw_definitions = [raw_definitions]
        elif not isinstance(raw_definitions, list):
            errors.append(
                f"{metric}: expected a threshold expression or a list of them, "
                f"got {type(raw_definitions).__name__}"
            )
            continue

        metric_type = types.get(base_metric_name(metric))
        results: list[ParsedThreshold] = []
        for raw in raw_definitions:
            try:
                definition = ThresholdDefinition.model_validate(raw)
            except ValidationError as e:
                errors.append(f"{metric}: invalid threshold definition {raw!r}: {_summarize(e)}")
                continue

            try:
                expression = parse_expression(definition.threshold)
            except ThresholdParseError as e:
                errors.append(f"{metric}: {e}")
                continue

            if metric_type is not None:
                try:
                    check_method_supported(expression.aggregation_method, metric_type)
                except UnsupportedMethodError as e:
                    errors.append(f"{metric}: {e.with_expression(definition.threshold)}")
                    continue

            results.append(
                ParsedThreshold(
                    metric=metric,
                    source=definition.threshold,
                    expression=expression,
                    abort_on_fail=definition.abort_on_fail,
                    delay_abort_eval=definition.delay_abort_eval,
                )
            )
            logger.debug("Parsed threshold %s for metric %s", expression, metric)
        parsed[metric] = results

    if errors:
        logger.warning("Rejected %d threshold(s)", len(errors))
        raise ThresholdConfigError(errors)

    logger.info(
        "Parsed %d threshold(s) across %d metric(s)",
        sum(len(v) for v in parsed.values()),
        len(parsed),
    )
    return parsed


def load_thresholds_file(
    path: Path,
    *,
    metric_types: Mapping[str, MetricType | str] | None = None,
) -> dict[str, list[ParsedThreshold]]:
    """Load a YAML or JSON thresholds file and parse it.

    A top-level ``thresholds`` key is unwrapped, so a full options file works too.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if isinstance(data, Mapping) and isinstance(data.get("thresholds"), Mapping):
        data = data["thresholds"]
    if not isinstance(data, Mapping):
        raise ThresholdConfigError(
            [f"{path}: expected a mapping of metric names to thresholds"]
        )
    logger.info("Loading thresholds from %s", path)
    return parse_thresholds(data, metric_types=metric_types)


def _summarize(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or 'definition'}: {e['msg']}"
        for e in error.errors()
    )
