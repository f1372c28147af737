# waste_manifest_reporter/loaders/table_loader.py
from __future__ import annotations
from pathlib import Path
import logging
import pandas as pd

from ..core.model import RawLineItem
from ..core.normalize import to_line_items
from ..utils.detect import UNSUPPORTED_MESSAGE, UnsupportedFileError, detect_kind

_LOG = logging.getLogger(__name__)


def _df_from_csv(path: Path) -> pd.DataFrame:
    return pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding="utf-8-sig",
    )


def _df_from_excel(path: Path) -> pd.DataFrame:
    # first sheet only
    return pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)


def load(path: Path) -> tuple[RawLineItem, ...]:
    """
    Accepts: a .csv, .xls or .xlsx file with a header row.
    Returns: raw line items (column header -> cell text).
    """
    kind = detect_kind(path)
    if kind == "unknown":
        raise UnsupportedFileError(f"{UNSUPPORTED_MESSAGE} ({path.name})")
    try:
        df = _df_from_csv(path) if kind == "csv" else _df_from_excel(path)
    except pd.errors.EmptyDataError:
        _LOG.info("%s has no rows", path.name)
        return ()
    except (ValueError, OSError, pd.errors.ParserError) as e:
        raise ValueError(f"{path.name}: could not decode {kind} file: {e}") from e

    items = to_line_items(df)
    _LOG.debug("%s: %d line item(s), columns=%s", path.name, len(items), list(df.columns))
    return items
