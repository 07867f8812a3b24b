"""
plotting.py: Draws ChartSpec objects with matplotlib and saves them as PNG.
"""

import logging
import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

logger = logging.getLogger(__name__)


def render_chart(spec, outpath: str) -> str:
    x_positions = np.arange(len(spec.labels))
    n_series = len(spec.series)
    width = 0.8 / n_series

    plt.figure(figsize=(max(6, len(spec.labels) * 0.6), 4))
    try:
        for i, s in enumerate(spec.series):
            offset = (i - (n_series - 1) / 2) * width
            plt.bar(x_positions + offset, s["values"], width=width, label=s["label"],
                    color=s.get("color"), edgecolor="black")
        plt.xticks(x_positions, spec.labels, rotation=45 if len(spec.labels) > 8 else 0)
        plt.title(spec.title)
        plt.xlabel(spec.x_label)
        plt.ylabel(spec.y_label)
        if spec.y_max is not None:
            plt.ylim(0, spec.y_max)
        if n_series > 1:
            plt.legend()
        plt.tight_layout()
        plt.savefig(outpath)
    finally:
        plt.close()
    return outpath


def render_charts(specs, out_dir: str) -> list:
    """
    Render every spec into `out_dir/<slug>.png`; returns the written paths.
    """
    os.makedirs(out_dir, exist_ok=True)
    paths = []
    for spec in specs:
        outpath = os.path.join(out_dir, f"{spec.slug}.png")
        render_chart(spec, outpath)
        logger.info(f"[plotting] Saved '{spec.title}' to {outpath}")
        paths.append(outpath)
    return paths
