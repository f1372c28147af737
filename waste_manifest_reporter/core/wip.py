# waste_manifest_reporter/core/wip.py
from __future__ import annotations
from typing import Iterable

from .classify import ClassificationCfg, DEFAULT_CLASSIFICATION, is_detail_unit
from .codes import parse_line_number, parse_weight, round_weight, split_wip_codes
from .model import (
    COL_EPA_CODES,
    COL_GENERATOR_CODE,
    COL_LINE,
    COL_UOM,
    COL_WASTE_NAME,
    COL_WEIGHT,
    COL_WIP,
    RawLineItem,
    WipGroup,
    field,
)


def _counts_weight(row: RawLineItem, cfg: ClassificationCfg) -> bool:
    # laxer than the summary rule: 'lb' is accepted, and a weight without any unit counts
    uom = field(row, COL_UOM)
    if uom:
        return is_detail_unit(uom, cfg)
    return bool(field(row, COL_WEIGHT))


def _sort_key(group: WipGroup) -> tuple[int, int]:
    n = parse_line_number(group.first_line)
    return (1, 0) if n is None else (0, n)


def group_by_wip(line_items: Iterable[RawLineItem],
                 cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> list[WipGroup]:
    """
    Sub-group one manifest's line items by WIP key for the detail view.

    Groups are ordered by the line number of their first line item; groups
    without a numeric line number follow, in first-seen order.
    """
    acc: dict[str, dict] = {}
    for row in line_items:
        wip = field(row, COL_WIP)
        g = acc.get(wip)
        if g is None:
            g = acc[wip] = {
                "rows": [],
                "names": {},
                "gen_codes": {},
                "codes": {},
                "weight": 0,
                "first_line": field(row, COL_LINE),
            }
        g["rows"].append(row)

        name = field(row, COL_WASTE_NAME)
        if name:
            g["names"].setdefault(name, None)
        gen_code = field(row, COL_GENERATOR_CODE)
        if gen_code:
            g["gen_codes"].setdefault(gen_code, None)
        for c in split_wip_codes(field(row, COL_EPA_CODES)):
            g["codes"].setdefault(c, None)

        if _counts_weight(row, cfg):
            weight = parse_weight(field(row, COL_WEIGHT))
            if weight is not None:
                g["weight"] += round_weight(weight)

    groups = [
        WipGroup(
            wip=wip,
            waste_names=tuple(g["names"]),
            generator_codes=tuple(g["gen_codes"]),
            epa_codes=tuple(g["codes"]),
            total_weight=g["weight"],
            first_line=g["first_line"],
            line_items=tuple(g["rows"]),
        )
        for wip, g in acc.items()
    ]
    return sorted(groups, key=_sort_key)
