from .core import (
    calculate_qc_metrics,
    filter_cells_and_genes,
    normalize_and_log,
    plot_qc_violins,
    scale_data,
    select_variable_genes,
)

__all__ = [
    "calculate_qc_metrics",
    "filter_cells_and_genes",
    "normalize_and_log",
    "plot_qc_violins",
    "scale_data",
    "select_variable_genes",
]
