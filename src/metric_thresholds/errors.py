"""Error types raised while parsing threshold expressions."""

from __future__ import annotations

from typing import Self


class ThresholdParseError(ValueError):
    """Base class for every threshold expression failure.

    ``expression`` holds the full input when the error was raised (or re-raised)
    by ``parse_expression``; lower layers leave it as ``None``.
    """

    def __init__(self, detail: str, *, expression: str | None = None) -> None:
        self.detail = detail
        self.expression = expression
        if expression is None:
            super().__init__(detail)
        else:
            super().__init__(f"invalid threshold expression '{expression}': {detail}")

    def with_expression(self, expression: str) -> Self:
        """Return a copy of this error annotated with the full expression."""
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        ThresholdParseError.__init__(clone, self.detail, expression=expression)
        return clone


class ScanError(ThresholdParseError):
    def __init__(self, *, expression: str | None = None) -> None:
        super().__init__(
            "unrecognized operator, expected one of <, <=, >, >=, ==, ===, !=",
            expression=expression,
        )


class UnknownMethodError(ThresholdParseError):
    def __init__(self, token: str, *, expression: str | None = None) -> None:
        self.token = token
        super().__init__(
            f"unknown aggregation method '{token}', expected one of "
            "count, rate, value, avg, min, max, med or p(N)",
            expression=expression,
        )


class UnsupportedMethodError(UnknownMethodError):
    """The method is well formed but does not apply to the metric's type."""

    def __init__(self, token: str, metric_type: str, supported: tuple[str, ...]) -> None:
        self.metric_type = metric_type
        self.supported = supported
        ThresholdParseError.__init__(
            self,
            f"aggregation method '{token}' is not supported by {metric_type} metrics, "
            f"supported: {', '.join(supported)}",
        )
        self.token = token


class ValueParseError(ThresholdParseError):
    def __init__(self, token: str, *, expression: str | None = None) -> None:
        self.token = token
        super().__init__(
            f"threshold value '{token}' is not a finite number",
            expression=expression,
        )


class ThresholdConfigError(Exception):
    """Raised when one or more thresholds in a configuration fail to parse."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"{len(errors)} invalid threshold(s): {'; '.join(errors)}")
