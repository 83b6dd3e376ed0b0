"""Typer CLI for metric-thresholds.

Commands:
  check     Parse one or more threshold expressions
  validate  Validate a YAML/JSON thresholds file
  methods   List aggregation methods supported per metric type
"""

from __future__ import annotations

import json
import logging
from pathlib import Path  # noqa: TC003 — Typer evaluates type hints at runtime
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from metric_thresholds.config import ThresholdSettings
from metric_thresholds.errors import ThresholdConfigError, ThresholdParseError
from metric_thresholds.loader import load_thresholds_file
from metric_thresholds.methods import supported_methods
from metric_thresholds.models import format_value
from metric_thresholds.parser import parse_expression
from metric_thresholds.types import MetricType

app = typer.Typer(
    name="metric-thresholds",
    help="Parse and validate metric threshold expressions",
    no_args_is_help=True,
)
console = Console()

FormatOption = Annotated[
    str | None, typer.Option("--format", "-f", help="Output format: text or json")
]


@app.callback()
def main() -> None:
    """Parse and validate metric threshold expressions."""
    settings = ThresholdSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _output_format(format: str | None) -> str:
    fmt = format or ThresholdSettings().output_format
    if fmt not in ("text", "json"):
        console.print(f"[red]Unknown format '{escape(fmt)}'. Use text or json[/red]")
        raise typer.Exit(1)
    return fmt


def _parse_metric_types(items: list[str]) -> dict[str, MetricType]:
    """Parse name=type strings into a metric type mapping."""
    types: dict[str, MetricType] = {}
    for item in items:
        if "=" not in item:
            console.print(f"[red]Invalid metric type format: '{escape(item)}'. Use name=type[/red]")
            raise typer.Exit(1)
        name, raw = item.split("=", 1)
        try:
            types[name.strip()] = MetricType(raw.strip().lower())
        except ValueError:
            available = ", ".join(t.value for t in MetricType)
            console.print(
                f"[red]Unknown metric type '{escape(raw)}'. Available: {available}[/red]"
            )
            raise typer.Exit(1) from None
    return types


@app.command()
def check(
    expressions: Annotated[
        list[str], typer.Argument(help="Threshold expressions, e.g. 'p(95)<200'")
    ],
    format: FormatOption = None,
) -> None:
    """Parse threshold expressions and show their structure."""
    fmt = _output_format(format)
    rows: list[dict] = []
    failed = False

    for raw in expressions:
        try:
            expr = parse_expression(raw)
        except ThresholdParseError as e:
            failed = True
            rows.append({"source": raw, "expression": None, "error": str(e)})
        else:
            rows.append({"source": raw, "expression": expr, "error": None})

    if fmt == "json":
        payload = [
            {
                "source": row["source"],
                "expression": row["expression"].model_dump(mode="json")
                if row["expression"] is not None
                else None,
                "error": row["error"],
            }
            for row in rows
        ]
        console.print_json(json.dumps(payload))
    else:
        table = Table(title="Threshold Expressions")
        table.add_column("Expression", style="cyan")
        table.add_column("Method")
        table.add_column("Operator")
        table.add_column("Value", style="green")
        table.add_column("Percentile")
        for row in rows:
            expr = row["expression"]
            if expr is None:
                continue
            percentile = expr.percentile
            table.add_row(
                escape(row["source"]),
                escape(expr.aggregation_method),
                expr.operator.value,
                format_value(expr.value),
                format_value(percentile) if percentile is not None else "",
            )
        if table.row_count:
            console.print(table)
        for row in rows:
            if row["error"]:
                console.print(f"  [red]✗[/red] {escape(row['error'])}")

    if failed:
        raise typer.Exit(1)


@app.command()
def validate(
    path: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="YAML or JSON thresholds file"),
    ],
    metric_type: Annotated[
        list[str] | None,
        typer.Option("--metric-type", "-t", help="Metric type (name=counter|gauge|rate|trend)"),
    ] = None,
    format: FormatOption = None,
) -> None:
    """Validate every threshold in a configuration file."""
    fmt = _output_format(format)
    types = _parse_metric_types(metric_type or [])

    try:
        parsed = load_thresholds_file(path, metric_types=types)
    except ThresholdConfigError as e:
        console.print("[red]Validation failed:[/red]")
        for err in e.errors:
            console.print(f"  [red]✗[/red] {escape(err)}")
        raise typer.Exit(1) from None
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        console.print(f"[red]Error reading {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    if fmt == "json":
        payload = {
            metric: [t.model_dump(mode="json") for t in thresholds]
            for metric, thresholds in parsed.items()
        }
        console.print_json(json.dumps(payload))
        return

    table = Table(title=f"Thresholds in {escape(path.name)}")
    table.add_column("Metric", style="cyan")
    table.add_column("Threshold")
    table.add_column("Abort on fail")
    table.add_column("Delay abort eval")
    for metric, thresholds in parsed.items():
        for t in thresholds:
            table.add_row(
                escape(metric),
                escape(str(t.expression)),
                "yes" if t.abort_on_fail else "no",
                str(t.delay_abort_eval) if t.delay_abort_eval is not None else "",
            )
    console.print(table)
    console.print(f"[green]{table.row_count} threshold(s) valid[/green]")


@app.command()
def methods() -> None:
    """List aggregation methods supported per metric type."""
    table = Table(title="Supported Aggregation Methods")
    table.add_column("Metric type", style="cyan")
    table.add_column("Methods", style="green")
    for metric_type in MetricType:
        table.add_row(metric_type.value, escape(", ".join(supported_methods(metric_type))))
    console.print(table)


if __name__ == "__main__":
    app()
