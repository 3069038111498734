from __future__ import annotations

"""Matplotlib heatmap of the mastery grid."""

from pathlib import Path
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap

from ..storage.schema import StatsTable
from .grid import GREEN, MIN_ATTEMPTS, RED, YELLOW, mastery_grid


def _rgb(c: tuple[int, int, int]) -> tuple[float, float, float]:
    return (c[0] / 255, c[1] / 255, c[2] / 255)


MASTERY_CMAP = LinearSegmentedColormap.from_list(
    "mastery", [(0.0, _rgb(RED)), (0.5, _rgb(YELLOW)), (1.0, _rgb(GREEN))]
)


def plot_mastery_heatmap(
    table: StatsTable,
    *,
    min_attempts: int = MIN_ATTEMPTS,
    save_path: Optional[str | Path] = None,
) -> None:
    grid = mastery_grid(table, min_attempts)
    M = np.ma.masked_invalid(grid.to_numpy(dtype="float64"))
    cmap = MASTERY_CMAP.with_extremes(bad="#333333")

    fig, ax = plt.subplots(figsize=(7, 6))
    im = ax.imshow(M, cmap=cmap, vmin=0, vmax=100, origin="upper")
    fig.colorbar(im, ax=ax, label="confidence")
    ax.set_xticks(np.arange(grid.shape[1]))
    ax.set_xticklabels(grid.columns.astype(str))
    ax.set_yticks(np.arange(grid.shape[0]))
    ax.set_yticklabels(grid.index.astype(str))
    for i in range(grid.shape[0]):
        for j in range(grid.shape[1]):
            if np.isnan(grid.iat[i, j]):
                continue
            v = float(grid.iat[i, j])
            ax.text(j, i, f"{v:.0f}", ha="center", va="center", fontsize=7, color="#111" if v > 55 else "#fff")
    ax.set_xlabel("b")
    ax.set_ylabel("a")
    ax.set_title(f"Mastery (a × b, {min_attempts}+ attempts)")
    if save_path:
        fig.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close(fig)
