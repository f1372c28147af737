# waste_manifest_reporter/core/reports.py
from __future__ import annotations
from pathlib import Path
from typing import Literal, Sequence
import numpy as np
import pandas as pd
from scipy.io import savemat

from .classify import ClassificationCfg, DEFAULT_CLASSIFICATION
from .export import summary_to_csv
from .model import DEFAULT_COLUMNS, NUMERIC_COLUMNS, ManifestSummary
from .wip import group_by_wip

ReportFormat = Literal["csv", "mat", "both"]

DETAIL_COLUMNS = [
    "manifest_num", "line", "wip", "waste_names", "generator_codes", "weight_lbs", "epa_codes",
]


def _write_csv(text: str, out_csv: Path, title: str) -> None:
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the CRLF row separators as written
    with out_csv.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    print(f"[OK] wrote report: {title} → {out_csv}")


def _to_mat_cellstr(seq: list[str]) -> np.ndarray:
    """Make a MATLAB column cell array from a list of strings."""
    seq2 = [("" if s is None else str(s)) for s in seq]
    arr = np.empty((len(seq2), 1), dtype=object)
    arr[:, 0] = seq2
    return arr


def _write_mat(rows: Sequence[ManifestSummary], out_mat: Path, varname: str, title: str,
               columns: Sequence[tuple[str, str]]) -> None:
    """
    Save a MATLAB struct with one field per summary column.
    Text becomes cell arrays (Nx1), weights become double (Nx1).
    """
    out_mat.parent.mkdir(parents=True, exist_ok=True)
    mat_struct = {}
    for key, _ in columns:
        values = [r.value(key) for r in rows]
        if key in NUMERIC_COLUMNS:
            mat_struct[key] = np.asarray(values, dtype=float).reshape(-1, 1)
        else:
            mat_struct[key] = _to_mat_cellstr(values)
    savemat(out_mat, {varname: mat_struct})
    print(f"[OK] wrote report: {title} → {out_mat}")


def write_summary_report(rows: Sequence[ManifestSummary],
                         out_base: Path,
                         title: str,
                         fmt: ReportFormat = "csv",
                         mat_variable: str = "manifests",
                         columns: Sequence[tuple[str, str]] = DEFAULT_COLUMNS) -> None:
    """
    Write the manifest summary in the requested format.
    - out_base is a *base path without extension* (e.g., .../summary)
    - fmt: "csv" | "mat" | "both"
    """
    if fmt not in ("csv", "mat", "both"):
        raise ValueError(f"unknown report format {fmt!r}")
    if fmt in ("csv", "both"):
        _write_csv(summary_to_csv(rows, columns), out_base.with_suffix(".csv"), title)
    if fmt in ("mat", "both") and rows:
        _write_mat(rows, out_base.with_suffix(".mat"), mat_variable, title, columns)


def build_detail_frame(summaries: Sequence[ManifestSummary],
                       cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> pd.DataFrame:
    """One row per WIP group of every manifest, in manifest then line order."""
    rows: list[dict] = []
    for s in summaries:
        for g in group_by_wip(s.line_items, cfg):
            rows.append({
                "manifest_num": s.manifest_num,
                "line": g.first_line,
                "wip": g.wip,
                "waste_names": ", ".join(g.waste_names),
                "generator_codes": ", ".join(g.generator_codes),
                "weight_lbs": g.total_weight,
                "epa_codes": " ".join(g.epa_codes),
            })
    return pd.DataFrame(rows, columns=DETAIL_COLUMNS)


def write_detail_report(summaries: Sequence[ManifestSummary], out_csv: Path, title: str,
                        cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> None:
    if not summaries:
        return
    df_out = build_detail_frame(summaries, cfg)
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df_out.to_csv(out_csv, index=False, encoding="utf-8")
    print(f"[OK] wrote report: {title} → {out_csv}")
