from __future__ import annotations
from typing import Dict, List, Optional
import matplotlib.pyplot as plt

from .intervals import Interval
from .shift_map import ShiftMapping

def _bars(ax, row: int, spans: List[Interval], color=None, alpha: float = 0.6):
    if not spans:
        return
    ax.broken_barh([(iv.start, len(iv)) for iv in spans], (row - 0.4, 0.8),
                   facecolors=color, alpha=alpha)

def _finish(fig, ax, title: str, show: bool, save_path: Optional[str]):
    ax.set_title(title)
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    if show:
        plt.show()
    plt.close(fig)

def plot_stage_ranges(
    spans_by_label: Dict[str, List[Interval]],
    title: str = "",
    show: bool = True,
    save_path: Optional[str] = None,
):
    """Plot one row of interval bars per label (e.g. ranges leaving each stage)."""
    fig, ax = plt.subplots(figsize=(12, 1 + 0.5 * max(1, len(spans_by_label))))
    labels = list(spans_by_label)
    for row, label in enumerate(labels):
        _bars(ax, row, spans_by_label[label])
    ax.set_yticks(range(len(labels)))
    ax.set_yticklabels(labels)
    ax.set_xlabel("Value")
    _finish(fig, ax, title, show, save_path)

def plot_mapping(
    mapping: ShiftMapping,
    title: str = "",
    show: bool = True,
    save_path: Optional[str] = None,
):
    """Plot a mapping's domain, upward shifts on top row, downward shifts below."""
    fig, ax = plt.subplots(figsize=(12, 2))
    up = [r.interval for r in mapping if r.offset > 0]
    down = [r.interval for r in mapping if r.offset < 0]
    _bars(ax, 1, up, color="tab:green")
    _bars(ax, 0, down, color="tab:red")
    ax.set_yticks([0, 1])
    ax.set_yticklabels(["shift down", "shift up"])
    ax.set_xlabel("Value (%s)" % mapping.label)
    _finish(fig, ax, title or mapping.label, show, save_path)
