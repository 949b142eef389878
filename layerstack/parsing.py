"""Parse helpers for numeric input fields.

Layer heights, value ranges, frame indices and zero-pad digit counts arrive
as raw text from the editor.  These helpers never raise; the caller inspects
``ParseResult.ok`` and decides how to report a failure.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

_INT_PATTERN = re.compile(r"^\s*[+-]?\d+")


@dataclass
class ParseResult:
    """Outcome of parsing a single numeric field."""

    ok: bool
    value: float | int | None = None
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "value": self.value, "error": self.error}


def parse_int(raw: Any) -> ParseResult:
    """Parse a whole number, accepting a leading integer prefix ("12px" -> 12)."""
    if isinstance(raw, bool):
        return ParseResult(ok=False, error=f"Not a whole number: {raw!r}")
    if isinstance(raw, int):
        return ParseResult(ok=True, value=raw)
    if isinstance(raw, float):
        if math.isfinite(raw):
            return ParseResult(ok=True, value=int(raw))
        return ParseResult(ok=False, error=f"Not a whole number: {raw!r}")
    if not isinstance(raw, str):
        return ParseResult(ok=False, error=f"Not a whole number: {raw!r}")

    match = _INT_PATTERN.match(raw)
    if match is None:
        return ParseResult(ok=False, error=f"Not a whole number: {raw!r}")
    return ParseResult(ok=True, value=int(match.group(0)))


def parse_float(raw: Any) -> ParseResult:
    """Parse a finite number."""
    if isinstance(raw, bool) or raw is None:
        return ParseResult(ok=False, error=f"Not a number: {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return ParseResult(ok=False, error=f"Not a number: {raw!r}")
    if not math.isfinite(value):
        return ParseResult(ok=False, error=f"Not a finite number: {raw!r}")
    return ParseResult(ok=True, value=value)
