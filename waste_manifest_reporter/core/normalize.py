# waste_manifest_reporter/core/normalize.py
from __future__ import annotations
import warnings

import pandas as pd

from .model import RawLineItem


def _cell_text(v) -> str:
    if v is None or (not isinstance(v, str) and pd.isna(v)):
        return ""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def to_line_items(df: pd.DataFrame) -> tuple[RawLineItem, ...]:
    """
    Decoded sheet -> raw line items (column header -> text).
    Headers are stripped, missing cells become '', rows with no text at all are dropped.
    """
    headers = [str(c).strip() for c in df.columns]
    items: list[RawLineItem] = []
    for values in df.itertuples(index=False, name=None):
        row = {h: _cell_text(v) for h, v in zip(headers, values)}
        if not any(s.strip() for s in row.values()):
            continue
        items.append(row)
    return tuple(items)


def _parse_one(value) -> pd.Timestamp:
    text = _cell_text(value).strip()
    if not text:
        return pd.NaT
    with warnings.catch_warnings():
        # per-value parsing of free-form dates warns about format inference
        warnings.simplefilter("ignore", UserWarning)
        try:
            return pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return pd.NaT


def to_timestamp(series) -> pd.Series:
    """Ship date texts -> timestamps; anything unparsable becomes NaT."""
    return pd.Series([_parse_one(v) for v in series], dtype="object")
