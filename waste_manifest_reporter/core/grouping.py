# waste_manifest_reporter/core/grouping.py
from __future__ import annotations
from dataclasses import dataclass, field as dc_field
import logging
from typing import Iterable

from .classify import (
    ClassificationCfg,
    DEFAULT_CLASSIFICATION,
    clean_manifest_num,
    is_excluded,
    is_summary_unit,
    manifest_type,
)
from .codes import is_p_listed, parse_weight, round_weight, split_epa_codes
from .model import (
    COL_EPA_CODES,
    COL_GENERATOR_NAME,
    COL_MANIFEST,
    COL_SHIP_DATE,
    COL_UOM,
    COL_WEIGHT,
    GroupingResult,
    ManifestSummary,
    RawLineItem,
    field,
)

_LOG = logging.getLogger(__name__)


@dataclass
class _Acc:
    """Running totals for one manifest while folding over the input."""
    rows: list = dc_field(default_factory=list)
    codes: dict = dc_field(default_factory=dict)    # ordered set
    p_waste: int = 0
    haz_waste: int = 0
    non_haz_waste: int = 0


def _partition(rows: Iterable[RawLineItem], cfg: ClassificationCfg) -> tuple[dict[str, list], bool, int]:
    groups: dict[str, list] = {}
    unit_warning = False
    dropped = 0
    for row in rows:
        manifest_num = field(row, COL_MANIFEST)
        # excluded manifests contribute to nothing, not even the unit warning
        if is_excluded(manifest_num, cfg):
            dropped += 1
            continue
        groups.setdefault(manifest_num, []).append(row)
        uom = field(row, COL_UOM)
        if uom and not is_summary_unit(uom, cfg):
            unit_warning = True
    return groups, unit_warning, dropped


def _summarize(manifest_num: str, rows: list, cfg: ClassificationCfg) -> ManifestSummary:
    kind = manifest_type(manifest_num, cfg)
    acc = _Acc(rows=rows)

    for row in rows:
        codes = split_epa_codes(field(row, COL_EPA_CODES))
        for c in codes:
            acc.codes.setdefault(c, None)

        if not is_summary_unit(field(row, COL_UOM), cfg):
            continue
        weight = parse_weight(field(row, COL_WEIGHT))
        # negative weights would break haz >= p >= 0
        if weight is None or weight < 0:
            continue
        units = round_weight(weight)

        if kind == "Non-Hazardous":
            # decided on this row's own codes, not the manifest's accumulated set
            if codes:
                acc.haz_waste += units
            else:
                acc.non_haz_waste += units
        elif any(is_p_listed(c) for c in codes):
            acc.p_waste += units
            acc.haz_waste += units
        else:
            acc.haz_waste += units

    first = rows[0]
    return ManifestSummary(
        manifest_num=clean_manifest_num(manifest_num, cfg),
        ship_date=field(first, COL_SHIP_DATE),
        generator_name=field(first, COL_GENERATOR_NAME),
        epa_codes=tuple(acc.codes),
        p_waste=acc.p_waste,
        haz_waste=acc.haz_waste,
        non_haz_waste=acc.non_haz_waste,
        line_items=tuple(acc.rows),
    )


def group_manifests(rows: Iterable[RawLineItem],
                    cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> GroupingResult:
    """
    Group raw line items by manifest number and classify each manifest.

    Summaries come out in the order their manifest number was first seen.
    The unit warning is global: it is set when any retained line item carries
    a unit other than the accepted pound units.
    """
    groups, unit_warning, dropped = _partition(rows, cfg)
    if dropped:
        _LOG.debug("excluded %d line item(s) with prefix '%s'", dropped, cfg.excluded_prefix)

    summaries = tuple(_summarize(num, grp, cfg) for num, grp in groups.items())
    _LOG.debug("grouped %d manifest(s), unit_warning=%s", len(summaries), unit_warning)
    return GroupingResult(summaries=summaries, unit_warning=unit_warning)
