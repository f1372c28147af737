# waste_manifest_reporter/core/pipeline.py
from __future__ import annotations
from pathlib import Path
from typing import Sequence

from .classify import prepare_classification
from .model import Page, RawLineItem
from .plotting import save_summary_plot
from .reports import write_detail_report, write_summary_report
from .table import ManifestTable

UNIT_WARNING = ("Warning: Some line items have a unit of measure other than Lbs. "
                "Only Lbs are summed for total weight.")


def build_table(rows: Sequence[RawLineItem], cfg: dict) -> ManifestTable:
    """ManifestTable configured from the 'table' and 'classification' sections."""
    tbl = (cfg or {}).get("table", {}) or {}
    page_size = tbl.get("page_size")
    table = ManifestTable(
        rows,
        cfg=prepare_classification(cfg),
        page_size=10 if page_size is None else int(page_size),
        sort_by=str(tbl.get("sort_by") or "ship_date"),
        sort_order=str(tbl.get("sort_order") or "desc").lower(),
    )
    column = tbl.get("filter_column")
    text = tbl.get("filter_text")
    if column and text not in (None, ""):
        table.set_filter(str(column), str(text))
    return table


def run_pipeline(rows: Sequence[RawLineItem], cfg: dict, out_root: Path) -> Page:
    cfg = cfg or {}
    verbose = bool(cfg.get("logging", {}).get("verbose", True))
    table = build_table(rows, cfg)

    if table.unit_warning:
        print(f"[WARN] {UNIT_WARNING}")

    view = table.view()
    if verbose:
        print(
            f"[table] {len(table.summaries)} manifest(s), {len(view.rows)} after filter; "
            f"sorted by {table.sort_by} {table.sort_order}"
        )

    rep = cfg.get("reports", {}) or {}
    fmt = str(rep.get("format", "csv")).lower()
    mat_var = str(rep.get("mat_variable", "manifests"))

    out_root.mkdir(parents=True, exist_ok=True)
    write_summary_report(view.rows, out_root / "summary", "manifest summary", fmt=fmt, mat_variable=mat_var)

    if bool(rep.get("details", True)):
        write_detail_report(view.rows, out_root / "details.csv", "WIP line items",
                            cfg=prepare_classification(cfg))
    if bool(rep.get("plot", True)):
        save_summary_plot(view.rows, out_root / "summary.png", "Waste by manifest")

    if verbose:
        print(f"Page {view.page + 1} of {view.total_pages}")
        for r in view.page_rows:
            print(
                f"  {r.ship_date:<12} {r.manifest_num:<16} P={r.p_waste:<6} "
                f"haz={r.haz_waste:<6} non-haz={r.non_haz_waste:<6} {r.epa_codes_text}"
            )
    return view
