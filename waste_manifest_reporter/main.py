# waste_manifest_reporter/main.py
from __future__ import annotations
from pathlib import Path
import logging
import sys
import yaml

from waste_manifest_reporter.core.pipeline import run_pipeline
from waste_manifest_reporter.loaders import table_loader
from waste_manifest_reporter.utils.detect import UnsupportedFileError, discover_inputs

DEFAULT_CONFIG = Path(__file__).resolve().parent / "config.yaml"


def load_config(cfg_path: Path) -> dict:
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    # ---------- config ----------
    cfg_path = Path(argv[0]).resolve() if argv else DEFAULT_CONFIG
    cfg = load_config(cfg_path)
    base = cfg_path.parent

    log_cfg = cfg.get("logging", {}) or {}
    verbose = bool(log_cfg.get("verbose", True))
    logging.basicConfig(
        level=str(log_cfg.get("level", "WARNING")).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    in_cfg = cfg.get("input", {}) or {}
    in_path = (base / str(in_cfg.get("path", "input"))).resolve()
    recurse = bool(in_cfg.get("recurse", True))
    out_root = (base / str((cfg.get("output", {}) or {}).get("root", "output"))).resolve()

    if verbose:
        print(f"[cfg] input={in_path} (recurse={recurse})")
        print(f"[cfg] output={out_root}")

    # ---------- discover ----------
    try:
        detected = discover_inputs(in_path, recurse=recurse)
    except UnsupportedFileError as e:
        print(f"[ERROR] {e}")
        return 2
    if not detected:
        print(f"[INFO] No CSV/XLS/XLSX inputs found under: {in_path}")
        return 0
    if verbose:
        kinds: dict[str, int] = {}
        for d in detected:
            kinds.setdefault(d.kind, 0)
            kinds[d.kind] += 1
        print(f"[detector] found {sum(kinds.values())} inputs → {kinds}")

    # ---------- load ----------
    rows = []
    for item in detected:
        if verbose:
            print(f"  [load] {item.kind:5} {item.path.name}")
        try:
            rows.extend(table_loader.load(item.path))
        except Exception as e:
            print(f"[WARN] loader failed for {item.path.name}: {e}")

    if not rows:
        print("[INFO] No line items loaded; exiting without processing pipeline.")
        return 0

    if verbose:
        print(f"[pipeline] processing {len(rows)} line item(s) from {len(detected)} file(s)")
    run_pipeline(rows, cfg, out_root)
    return 0


if __name__ == "__main__":
    sys.exit(main())
