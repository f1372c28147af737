# waste_manifest_reporter/core/export.py
from __future__ import annotations
from typing import Sequence

from .model import DEFAULT_COLUMNS, ManifestSummary


def _csv_field(value) -> str:
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    return str(value)


def summary_to_csv(rows: Sequence[ManifestSummary],
                   columns: Sequence[tuple[str, str]] = DEFAULT_COLUMNS) -> str:
    """
    CSV text of summary rows: header of comma-joined labels, text fields
    quoted with doubled inner quotes, numbers bare, CRLF between rows.
    """
    header = ",".join(label for _, label in columns)
    lines = [header]
    for row in rows:
        lines.append(",".join(_csv_field(row.value(key)) for key, _ in columns))
    return "\r\n".join(lines)
