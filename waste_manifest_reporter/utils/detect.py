# waste_manifest_reporter/utils/detect.py
from __future__ import annotations
from pathlib import Path
from dataclasses import dataclass
from typing import Literal

DetectedKind = Literal["csv", "xls", "xlsx", "unknown"]

UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload a CSV or Excel file."


class UnsupportedFileError(ValueError):
    """Raised for an explicitly requested file that is not CSV/XLS/XLSX."""


@dataclass(frozen=True)
class DetectedItem:
    path: Path        # actual path on disk
    kind: DetectedKind


def detect_kind(p: Path) -> DetectedKind:
    """
    Classify a single path by extension.
    - .csv  -> 'csv'
    - .xls  -> 'xls'
    - .xlsx -> 'xlsx'
    else    -> 'unknown'
    """
    suffix = p.suffix.lower()
    if suffix == ".csv":
        return "csv"
    if suffix == ".xls":
        return "xls"
    if suffix == ".xlsx":
        return "xlsx"
    return "unknown"


def discover_inputs(root: Path, recurse: bool = True) -> list[DetectedItem]:
    """
    If 'root' is a file -> return that one item, or raise UnsupportedFileError.
    If 'root' is a folder -> walk (optionally recursively) and collect .csv/.xls/.xlsx.
    """
    items: list[DetectedItem] = []
    if root.is_file():
        kind = detect_kind(root)
        if kind == "unknown":
            raise UnsupportedFileError(f"{UNSUPPORTED_MESSAGE} ({root.name})")
        items.append(DetectedItem(root.resolve(), kind))
        return items

    if not root.exists():
        return items

    it = root.rglob("*") if recurse else root.glob("*")
    for p in it:
        if not p.is_file() or p.name.startswith("~$"):   # skip Excel lock files
            continue
        kind = detect_kind(p)
        if kind != "unknown":
            items.append(DetectedItem(p.resolve(), kind))

    # deterministic ordering
    items.sort(key=lambda x: str(x.path))
    return items
