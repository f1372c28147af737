# waste_manifest_reporter/core/classify.py
from __future__ import annotations
from dataclasses import dataclass
import logging
import re
from typing import Iterable, Literal

ManifestType = Literal["Hazardous", "Non-Hazardous", "Unknown"]

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationCfg:
    excluded_prefix: str = "NY"
    hazardous_prefix: str = "0"
    non_hazardous_prefix: str = "ZZ"
    summary_units: tuple[str, ...] = ("lbs", "pounds")
    detail_units: tuple[str, ...] = ("lbs", "pounds", "lb")
    display_suffix: str = "VES"


DEFAULT_CLASSIFICATION = ClassificationCfg()


def _units(value, default: tuple[str, ...], key: str) -> tuple[str, ...]:
    if value is None:
        return default
    if not isinstance(value, Iterable) or isinstance(value, (str, bytes)):
        raise ValueError(f"classification.{key} must be a list of unit names")
    units = tuple(str(u).strip().lower() for u in value if str(u).strip())
    if not units:
        raise ValueError(f"classification.{key} must name at least one unit")
    return units


def prepare_classification(global_cfg: dict | None) -> ClassificationCfg:
    """
    Read the classification section from config and return a ClassificationCfg.
    Missing keys keep the defaults.
    """
    cls = (global_cfg or {}).get("classification", {}) or {}
    if not isinstance(cls, dict):
        raise ValueError("classification section must be a mapping")

    d = DEFAULT_CLASSIFICATION
    out = ClassificationCfg(
        excluded_prefix=str(cls.get("excluded_prefix", d.excluded_prefix)),
        hazardous_prefix=str(cls.get("hazardous_prefix", d.hazardous_prefix)),
        non_hazardous_prefix=str(cls.get("non_hazardous_prefix", d.non_hazardous_prefix)),
        summary_units=_units(cls.get("summary_units"), d.summary_units, "summary_units"),
        detail_units=_units(cls.get("detail_units"), d.detail_units, "detail_units"),
        display_suffix=str(cls.get("display_suffix", d.display_suffix)),
    )
    _LOG.debug("classification rules: %s", out)
    return out


def _starts(value: str, prefix: str) -> bool:
    # an empty prefix disables the rule
    return bool(prefix) and value.startswith(prefix)


def manifest_type(manifest_num: str, cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> ManifestType:
    """
    Type from the raw manifest number:
      '0...'  -> Hazardous
      'ZZ...' -> Non-Hazardous
      else    -> Unknown
    """
    if _starts(manifest_num, cfg.hazardous_prefix):
        return "Hazardous"
    if _starts(manifest_num, cfg.non_hazardous_prefix):
        return "Non-Hazardous"
    return "Unknown"


def is_excluded(manifest_num: str, cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> bool:
    return _starts(manifest_num, cfg.excluded_prefix)


def clean_manifest_num(manifest_num: str, cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> str:
    """Strip a trailing (optionally space-preceded) display suffix such as ' VES'."""
    if not cfg.display_suffix:
        return manifest_num
    pattern = r"\s*" + re.escape(cfg.display_suffix) + r"\s*$"
    return re.sub(pattern, "", manifest_num, count=1, flags=re.IGNORECASE)


def is_summary_unit(uom: str, cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> bool:
    return bool(uom) and uom.lower() in cfg.summary_units


def is_detail_unit(uom: str, cfg: ClassificationCfg = DEFAULT_CLASSIFICATION) -> bool:
    return bool(uom) and uom.lower() in cfg.detail_units
