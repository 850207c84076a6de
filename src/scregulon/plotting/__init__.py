from .base import dim_plot, feature_plot
from .heatmap import plot_tf_heatmap
from .style import ACTIVITY_CMAP, SEURAT_DISCRETE, discrete_colors, set_style

__all__ = [
    "dim_plot",
    "feature_plot",
    "plot_tf_heatmap",
    "ACTIVITY_CMAP",
    "SEURAT_DISCRETE",
    "discrete_colors",
    "set_style",
]
