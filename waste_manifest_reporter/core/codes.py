# waste_manifest_reporter/core/codes.py
from __future__ import annotations
import math
import re

_EPA_SPLIT = re.compile(r"[ ,]+")
_WIP_SPLIT = re.compile(r"[,; ]+")
_P_LISTED = re.compile(r"P\d+", re.IGNORECASE | re.ASCII)
# leading number, like parseFloat: "100 lbs" -> 100.0
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def split_epa_codes(text: str | None) -> list[str]:
    """Codes of a summary line item: split on runs of spaces/commas, empties dropped."""
    if not text:
        return []
    return [c.strip() for c in _EPA_SPLIT.split(text) if c.strip()]


def split_wip_codes(text: str | None) -> list[str]:
    """Codes of a detail line item: also accepts ';' as a separator."""
    if not text:
        return []
    return [c for c in _WIP_SPLIT.split(text) if c]


def is_p_listed(code: str) -> bool:
    return bool(_P_LISTED.fullmatch(code or ""))


def parse_weight(text: str | None) -> float | None:
    """Leading numeric value of a weight cell, None when missing or not finite."""
    if text is None:
        return None
    m = _LEADING_FLOAT.match(str(text))
    if m is None:
        return None
    try:
        value = float(m.group(1))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def round_weight(value: float) -> int:
    # half rounds toward +inf
    return int(math.floor(value + 0.5))


def parse_line_number(text: str | None) -> int | None:
    if text is None:
        return None
    m = _LEADING_INT.match(str(text))
    return int(m.group(1)) if m else None
