# waste_manifest_reporter/core/plotting.py
from __future__ import annotations
from pathlib import Path
from typing import Sequence
import matplotlib.pyplot as plt
import numpy as np

from .model import ManifestSummary


def save_summary_plot(rows: Sequence[ManifestSummary], out_path: Path, title: str,
                      max_rows: int = 50) -> Path | None:
    """Stacked bars per manifest: P-listed, other hazardous and non-hazardous pounds."""
    if not rows:
        print(f"[INFO] {title}: no manifests; skipping summary plot.")
        return None
    shown = list(rows)[:max_rows]
    if len(rows) > len(shown):
        print(f"[INFO] {title}: plotting first {len(shown)} of {len(rows)} manifests.")

    labels = [r.manifest_num or "(blank)" for r in shown]
    p = np.array([r.p_waste for r in shown], dtype=float)
    other_haz = np.array([r.haz_waste - r.p_waste for r in shown], dtype=float)
    non_haz = np.array([r.non_haz_waste for r in shown], dtype=float)
    y = np.arange(len(shown))

    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.figure(figsize=(10, max(3.0, 0.35 * len(shown) + 1.5)))
    plt.barh(y, p, label="P-listed", color="#c62828")
    plt.barh(y, other_haz, left=p, label="Hazardous (other)", color="#ef6c00")
    plt.barh(y, non_haz, left=p + other_haz, label="Non-hazardous", color="#2e7d32")
    plt.yticks(y, labels, fontsize=8)
    plt.gca().invert_yaxis()
    plt.xlabel("Weight [Lbs]")
    plt.title(title)
    plt.grid(True, axis="x", alpha=0.3)
    plt.legend(fontsize=8, loc="lower right")
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    print(f"[OK] wrote plot: {title} → {out_path}")
    return out_path
