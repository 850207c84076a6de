"""
End-to-end TF activity workflow: QC, clustering, cell-type annotation, VIPER
scoring on a DoRothEA regulon, and clustering/visualisation in TF space.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from anndata import AnnData

from . import preprocessing as pp
from . import tools as tl
from . import plotting as pl
from .grn import (
    ViperOptions,
    build_regulon,
    filter_confidence,
    run_tf_activity,
    select_variable_tfs,
    summarize_by_group,
)
from .grn.regulon import TargetProfile


@dataclass
class WorkflowResult:
    adata: AnnData
    tf_adata: AnnData
    regulon: Dict[str, TargetProfile]
    tf_markers: pd.DataFrame
    summary: pd.DataFrame
    top_tfs: List[str]
    figures: Dict[str, str] = field(default_factory=dict)


def run_workflow(
    adata: AnnData,
    interactions: pd.DataFrame,
    levels: Iterable[str] = ("A", "B", "C"),
    options: Optional[Union[ViperOptions, dict]] = None,
    n_tfs: int = 180,
    min_genes: int = 200,
    max_genes: Optional[int] = 2500,
    min_cells: int = 3,
    max_pct_mt: float = 5.0,
    n_top_genes: int = 2000,
    n_pcs: int = 10,
    n_neighbors: int = 30,
    resolution: float = 0.5,
    marker_dict: Optional[dict] = None,
    celltype_key: str = "cell_type",
    fig_dir: Optional[str] = None,
    random_state: int = 42,
) -> WorkflowResult:
    """
    Run the full single-cell TF activity analysis on raw counts.

    Parameters
    ----------
    adata : AnnData
        Raw counts (cells x genes). Modified in place.
    interactions : pd.DataFrame
        TF-target table with columns tf, target, mor, confidence, likelihood.
    levels : iterable of str
        Confidence tiers kept when building the regulon.
    options : ViperOptions or dict, optional
        Scoring configuration. Defaults to
        ``ViperOptions(method="scale", minsize=4, eset_filter=False, cores=1)``.
    n_tfs : int
        Number of most variable TFs (across cell types) shown in the heatmap.
    fig_dir : str, optional
        Directory for UMAP and heatmap figures. No figures are written when omitted.

    Returns
    -------
    WorkflowResult
    """
    if options is None:
        options = ViperOptions(method="scale", minsize=4, eset_filter=False, cores=1, verbose=False)
    figures = {}
    if fig_dir:
        os.makedirs(fig_dir, exist_ok=True)

    # 1. Expression space
    print("\n--- Preprocessing ---")
    pp.calculate_qc_metrics(adata)
    pp.filter_cells_and_genes(adata, min_genes=min_genes, max_genes=max_genes,
                              min_cells=min_cells, max_pct_mt=max_pct_mt)
    pp.normalize_and_log(adata)
    pp.select_variable_genes(adata, n_top_genes=n_top_genes)
    pp.scale_data(adata)

    print("\n--- Clustering on gene expression ---")
    tl.run_pca_and_neighbors(adata, n_pcs=n_pcs, n_neighbors=n_neighbors, random_state=random_state)
    tl.run_umap_and_cluster(adata, resolution=resolution, random_state=random_state)
    cluster_key = f"leiden_{resolution}"
    tl.score_cell_types(adata, marker_dict, groupby=cluster_key, key_added=celltype_key)

    if fig_dir:
        figures["umap_expression"] = os.path.join(fig_dir, "umap_expression.png")
        pl.dim_plot(adata, color=celltype_key, show=False, save_path=figures["umap_expression"])
        plt.close("all")

    # 2. Regulon and VIPER scoring on the log-normalised layer
    print("\n--- TF activity inference ---")
    regulon = build_regulon(filter_confidence(interactions, levels))
    print(f"Built regulon with {len(regulon)} TFs (confidence {list(levels)}).")
    tf_adata = run_tf_activity(adata, regulon, options, layer="logcounts")
    tf_adata.X = np.nan_to_num(tf_adata.X)

    # 3. TF activity space
    print("\n--- Clustering on TF activity ---")
    pp.scale_data(tf_adata, layer_key="activity")
    tl.run_pca_and_neighbors(tf_adata, n_pcs=n_pcs, n_neighbors=n_neighbors, random_state=random_state)
    tl.run_umap_and_cluster(tf_adata, resolution=resolution, random_state=random_state)
    tf_markers = tl.find_all_markers(tf_adata, groupby=cluster_key, only_pos=True,
                                     min_pct=0.0, logfc_threshold=None)

    if fig_dir:
        figures["umap_tf_activity"] = os.path.join(fig_dir, "umap_tf_activity.png")
        pl.dim_plot(tf_adata, color=celltype_key, show=False, save_path=figures["umap_tf_activity"])
        plt.close("all")

    # 4. Per cell type summary on unscaled scores
    summary = summarize_by_group(_unscaled(tf_adata), celltype_key)
    top_tfs = select_variable_tfs(summary, n_tfs=n_tfs)
    print(f"Selected {len(top_tfs)} TFs with the most variable activity across cell types.")

    if fig_dir:
        figures["tf_heatmap"] = os.path.join(fig_dir, "tf_activity_heatmap.png")
        pl.plot_tf_heatmap(summary, top_tfs, save_path=figures["tf_heatmap"])
        plt.close("all")

    return WorkflowResult(
        adata=adata,
        tf_adata=tf_adata,
        regulon=regulon,
        tf_markers=tf_markers,
        summary=summary,
        top_tfs=top_tfs,
        figures=figures,
    )


def _unscaled(tf_adata: AnnData) -> AnnData:
    return AnnData(X=tf_adata.layers["activity"], obs=tf_adata.obs, var=pd.DataFrame(index=tf_adata.var_names))
