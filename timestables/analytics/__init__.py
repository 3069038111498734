from .grid import confidence_color, mastery_grid, attempts_grid, format_grid, has_any_score
from .plots import plot_mastery_heatmap

__all__ = [
    "confidence_color",
    "mastery_grid",
    "attempts_grid",
    "format_grid",
    "has_any_score",
    "plot_mastery_heatmap",
]
