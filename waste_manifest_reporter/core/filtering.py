# waste_manifest_reporter/core/filtering.py
from __future__ import annotations
import operator
import re
from typing import Callable, Sequence

from .model import COLUMN_KEYS, NUMERIC_COLUMNS, ManifestSummary

# >, <, >=, <=, =, ==, != followed by an (optionally negative) number
_NUMERIC_FILTER = re.compile(r"([<>]=?|={1,2}|!=)\s*(-?[0-9]+(\.[0-9]+)?)")

_OPS: dict[str, Callable[[float, float], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "=": operator.eq,
    "==": operator.eq,
    "!=": operator.ne,
}


def parse_numeric_filter(text: str) -> tuple[Callable[[float, float], bool], float] | None:
    """Return (comparison, operand) for texts like '>=150', None otherwise."""
    m = _NUMERIC_FILTER.fullmatch(text)
    if m is None:
        return None
    return _OPS[m.group(1)], float(m.group(2))


def _contains(value, needle: str) -> bool:
    if value is None:
        return False
    return needle in str(value).lower()


def filter_rows(rows: Sequence[ManifestSummary],
                column: str | None = None,
                text: str | None = None) -> list[ManifestSummary]:
    """
    Keep rows matching a single column filter, preserving order.

    Weight columns accept comparisons ('>=150', '!= 0'); any other text falls
    back to a case-insensitive substring match on the number's text.
    """
    if not column or not text:
        return list(rows)
    if column not in COLUMN_KEYS:
        raise KeyError(column)

    needle = text.lower()
    if column in NUMERIC_COLUMNS:
        parsed = parse_numeric_filter(text)
        if parsed is not None:
            op, num = parsed
            return [r for r in rows if op(r.value(column), num)]

    return [r for r in rows if _contains(r.value(column), needle)]
