# waste_manifest_reporter/core/table.py
from __future__ import annotations
import logging
from typing import Iterable

from .classify import ClassificationCfg, DEFAULT_CLASSIFICATION
from .filtering import filter_rows
from .grouping import group_manifests
from .model import COLUMN_KEYS, GroupingResult, ManifestSummary, Page, RawLineItem, WipGroup
from .paging import SortOrder, has_next, has_prev, paginate, sort_rows, total_pages
from .wip import group_by_wip

_LOG = logging.getLogger(__name__)


class ManifestTable:
    """
    Filter / sort / page state over the summaries of one loaded file.

    Every read recomputes filter -> sort -> paginate from the loaded line
    items; only the grouping is cached, and only until the next load().
    """

    def __init__(self,
                 rows: Iterable[RawLineItem] = (),
                 cfg: ClassificationCfg = DEFAULT_CLASSIFICATION,
                 page_size: int = 10,
                 sort_by: str = "ship_date",
                 sort_order: SortOrder = "desc"):
        total_pages(0, page_size)  # validates
        if sort_by not in COLUMN_KEYS:
            raise KeyError(sort_by)
        if sort_order not in ("asc", "desc"):
            raise ValueError(f"sort order must be 'asc' or 'desc', got {sort_order!r}")
        self._cfg = cfg
        self.page_size = page_size
        self.sort_by = sort_by
        self.sort_order: SortOrder = sort_order
        self.filter_column: str | None = None
        self.filter_text = ""
        self.page = 0
        self._seen = (0, page_size)
        self._rows: tuple[RawLineItem, ...] = ()
        self._grouped: GroupingResult | None = None
        self.load(rows)

    # ---------- input ----------
    def load(self, rows: Iterable[RawLineItem]) -> None:
        self._rows = tuple(rows)
        self._grouped = None
        _LOG.debug("loaded %d line item(s)", len(self._rows))

    @property
    def grouping(self) -> GroupingResult:
        if self._grouped is None:
            self._grouped = group_manifests(self._rows, self._cfg)
        return self._grouped

    @property
    def summaries(self) -> tuple[ManifestSummary, ...]:
        return self.grouping.summaries

    @property
    def unit_warning(self) -> bool:
        return self.grouping.unit_warning

    # ---------- filter ----------
    def select_filter_column(self, column: str) -> None:
        """Switching to another column drops the old filter text; reselecting keeps it."""
        if column not in COLUMN_KEYS:
            raise KeyError(column)
        if column != self.filter_column:
            self.filter_column = column
            self.filter_text = ""

    def set_filter(self, column: str, text: str) -> None:
        self.select_filter_column(column)
        self.filter_text = text or ""

    def clear_filter(self) -> None:
        self.filter_column = None
        self.filter_text = ""

    # ---------- sort ----------
    def toggle_sort(self, column: str) -> None:
        """Clicking the active column flips direction, a new column starts ascending."""
        if column not in COLUMN_KEYS:
            raise KeyError(column)
        if column == self.sort_by:
            self.sort_order = "desc" if self.sort_order == "asc" else "asc"
        else:
            self.sort_by = column
            self.sort_order = "asc"

    # ---------- paging ----------
    def set_page_size(self, page_size: int) -> None:
        total_pages(0, page_size)
        self.page_size = page_size

    def rows(self) -> list[ManifestSummary]:
        filtered = filter_rows(self.summaries, self.filter_column, self.filter_text)
        return sort_rows(filtered, self.sort_by, self.sort_order)

    def _sync_page(self, row_count: int) -> None:
        # back to the first page whenever the row count or page size changes
        seen = (row_count, self.page_size)
        if seen != self._seen:
            self._seen = seen
            self.page = 0

    def view(self) -> Page:
        rows = self.rows()
        self._sync_page(len(rows))
        return paginate(rows, self.page, self.page_size)

    def next_page(self) -> None:
        current = self.view()
        if has_next(current.page, current.total_pages):
            self.page += 1

    def prev_page(self) -> None:
        self.view()
        if has_prev(self.page):
            self.page -= 1

    # ---------- detail ----------
    def wip_groups(self, manifest_num: str) -> list[tuple[ManifestSummary, list[WipGroup]]]:
        """
        Detail groups for every summary displayed as manifest_num. Raw ids such
        as "001" and "001VES" both display as "001" and each keeps its own groups.
        """
        return [
            (s, group_by_wip(s.line_items, self._cfg))
            for s in self.summaries
            if s.manifest_num == manifest_num
        ]
