"""
Heatmap of mean TF activity per cell population.
"""

from typing import List, Optional

import numpy as np
import pandas as pd
import seaborn as sns
import matplotlib.pyplot as plt

from .style import ACTIVITY_CMAP, TICK_SIZE


def plot_tf_heatmap(
    summary: pd.DataFrame,
    tfs: Optional[List[str]] = None,
    cmap: str = ACTIVITY_CMAP,
    figsize: tuple = None,
    save_path: Optional[str] = None,
    show: bool = False,
):
    """
    Clustered heatmap of TF activities (TFs x groups), coloured symmetrically around 0.

    Parameters
    ----------
    summary : pd.DataFrame
        Groups x TFs mean activities, e.g. from ``summarize_by_group``.
    tfs : list, optional
        TFs to display, e.g. from ``select_variable_tfs``. All TFs by default.
    cmap : str
        Diverging colormap.
    save_path : str, optional
        Path to save the generated figure.

    Returns
    -------
    seaborn.matrix.ClusterGrid
    """
    if tfs is not None:
        missing = [tf for tf in tfs if tf not in summary.columns]
        if missing:
            raise ValueError(f"TF(s) not found in summary: {missing[:5]}")
        summary = summary[tfs]

    data = summary.T
    limit = float(np.nanmax(np.abs(data.to_numpy()))) if data.size else 1.0
    if figsize is None:
        figsize = (max(4, 0.6 * data.shape[1] + 3), max(4, 0.15 * data.shape[0] + 2))

    # clustering needs at least two rows/columns
    grid = sns.clustermap(
        data,
        cmap=cmap,
        center=0,
        vmin=-limit,
        vmax=limit,
        row_cluster=data.shape[0] > 1,
        col_cluster=data.shape[1] > 1,
        figsize=figsize,
        yticklabels=True,
        xticklabels=True,
        cbar_kws={"label": "mean activity"},
    )
    grid.ax_heatmap.tick_params(axis="both", labelsize=TICK_SIZE)
    grid.ax_heatmap.set_xlabel("")
    grid.ax_heatmap.set_ylabel("")

    if save_path:
        grid.savefig(save_path, bbox_inches='tight', dpi=150)
    if show:
        plt.show()
    return grid
