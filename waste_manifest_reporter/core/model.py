# waste_manifest_reporter/core/model.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping

RawLineItem = Mapping[str, str]

# source column headers
COL_MANIFEST = "Manifest #"
COL_SHIP_DATE = "Ship Date"
COL_GENERATOR_NAME = "Generator Name"
COL_UOM = "UOM"
COL_WEIGHT = "Lbs"
COL_EPA_CODES = "US EPA Codes"
COL_WIP = "WIP"
COL_WASTE_NAME = "Waste Name"
COL_GENERATOR_CODE = "Generator Code"
COL_LINE = "Ln"

# summary table column keys, in display order
COLUMN_KEYS: tuple[str, ...] = (
    "ship_date",
    "generator_name",
    "manifest_num",
    "p_waste",
    "haz_waste",
    "non_haz_waste",
    "epa_codes",
)
COLUMN_LABELS: tuple[str, ...] = (
    "Ship Date",
    "Generator Name",
    "Manifest #",
    "P-listed Waste (Lbs.)",
    "Hazardous Waste (Lbs.)",
    "Non-Hazardous Waste (Lbs.)",
    "EPA Codes",
)
DEFAULT_COLUMNS: tuple[tuple[str, str], ...] = tuple(zip(COLUMN_KEYS, COLUMN_LABELS))
NUMERIC_COLUMNS: frozenset[str] = frozenset({"p_waste", "haz_waste", "non_haz_waste"})


def field(item: RawLineItem, column: str) -> str:
    """Column value of a raw line item, '' when the column is absent or empty."""
    value = item.get(column)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class ManifestSummary:
    manifest_num: str                       # display id, VES suffix stripped
    ship_date: str                          # first line item of the manifest
    generator_name: str                     # first line item of the manifest
    epa_codes: tuple[str, ...]              # union over line items, first-seen order
    p_waste: int
    haz_waste: int
    non_haz_waste: int
    line_items: tuple[RawLineItem, ...]     # ingestion order

    @property
    def epa_codes_text(self) -> str:
        return ", ".join(self.epa_codes)

    def value(self, column: str):
        """Table value for a column key (codes as joined text)."""
        if column == "epa_codes":
            return self.epa_codes_text
        if column not in COLUMN_KEYS:
            raise KeyError(column)
        return getattr(self, column)


@dataclass(frozen=True)
class GroupingResult:
    summaries: tuple[ManifestSummary, ...]
    unit_warning: bool                      # some retained row used a non-pound unit


@dataclass(frozen=True)
class WipGroup:
    wip: str
    waste_names: tuple[str, ...]
    generator_codes: tuple[str, ...]
    epa_codes: tuple[str, ...]
    total_weight: int
    first_line: str                         # 'Ln' of the first line item seen for this key
    line_items: tuple[RawLineItem, ...]


@dataclass(frozen=True)
class Page:
    rows: tuple[ManifestSummary, ...]       # full filtered + sorted list
    page_rows: tuple[ManifestSummary, ...]
    page: int
    page_size: int
    total_pages: int
