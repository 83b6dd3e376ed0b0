"""Scanner: splits a threshold expression into method, operator and value tokens.

The scanner only splits. Empty or malformed method and value tokens are left
for the expression builder to reject.
"""

from __future__ import annotations

import re

from metric_thresholds.errors import ScanError
from metric_thresholds.types import OPERATOR_SCAN_ORDER

_OPERATOR_RE = re.compile("|".join(re.escape(op) for op in OPERATOR_SCAN_ORDER))


def scan(raw: str) -> tuple[str, str, str]:
    """Split ``raw`` around its first comparison operator.

    Returns ``(method, operator, value)`` with method and value stripped of
    surrounding whitespace. Raises ``ScanError`` if no operator is present;
    a lone ``!`` or ``=`` is not an operator.
    """
    match = _OPERATOR_RE.search(raw)
    if match is None:
        raise ScanError()
    return raw[: match.start()].strip(), match.group(), raw[match.end() :].strip()
