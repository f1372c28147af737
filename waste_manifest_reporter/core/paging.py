# waste_manifest_reporter/core/paging.py
from __future__ import annotations
import math
from typing import Literal, Sequence

import pandas as pd

from .model import COLUMN_KEYS, NUMERIC_COLUMNS, ManifestSummary, Page
from .normalize import to_timestamp

SortOrder = Literal["asc", "desc"]


def _date_keys(rows: Sequence[ManifestSummary]) -> list[tuple[int, int]]:
    stamps = to_timestamp(pd.Series([r.ship_date for r in rows], dtype="object"))
    # unparsable dates rank after every valid date
    return [(1, 0) if pd.isna(ts) else (0, ts.value) for ts in stamps]


def sort_rows(rows: Sequence[ManifestSummary],
              column: str = "ship_date",
              order: SortOrder = "desc") -> list[ManifestSummary]:
    """
    Order summary rows by one column. Ties keep their input order in both
    directions; no secondary column is applied.
    """
    if order not in ("asc", "desc"):
        raise ValueError(f"sort order must be 'asc' or 'desc', got {order!r}")
    if column not in COLUMN_KEYS:
        raise KeyError(column)
    rows = list(rows)
    if not rows:
        return rows

    if column in NUMERIC_COLUMNS:
        keys = [float(r.value(column)) for r in rows]
    elif column == "ship_date":
        keys = _date_keys(rows)
    else:
        keys = [(r.value(column) or "").lower() for r in rows]

    # sorted() is stable with reverse=True as well
    idx = sorted(range(len(rows)), key=keys.__getitem__, reverse=(order == "desc"))
    return [rows[i] for i in idx]


def total_pages(row_count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page size must be >= 1, got {page_size}")
    return max(1, math.ceil(row_count / page_size))


def paginate(rows: Sequence[ManifestSummary], page: int, page_size: int) -> Page:
    """Slice one page. The page index is not clamped; see has_prev/has_next."""
    pages = total_pages(len(rows), page_size)
    start = page * page_size
    rows = tuple(rows)
    return Page(
        rows=rows,
        page_rows=rows[start:start + page_size] if start >= 0 else (),
        page=page,
        page_size=page_size,
        total_pages=pages,
    )


def has_prev(page: int) -> bool:
    return page > 0


def has_next(page: int, pages: int) -> bool:
    return page + 1 < pages
