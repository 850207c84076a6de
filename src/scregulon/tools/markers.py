"""
Marker detection for every cluster against the rest of the cells.
"""

from typing import Optional

import pandas as pd
import scanpy as sc
from anndata import AnnData


def find_all_markers(
    adata: AnnData,
    groupby: str,
    only_pos: bool = True,
    min_pct: float = 0.25,
    logfc_threshold: Optional[float] = 0.25,
    method: str = "wilcoxon",
    key_added: str = "rank_genes_groups",
) -> pd.DataFrame:
    """
    Rank features for each group versus the rest and filter them the way
    Seurat's FindAllMarkers does.

    Parameters
    ----------
    adata : AnnData
        Annotated data matrix.
    groupby : str
        Key in ``adata.obs`` with the groups to compare.
    only_pos : bool
        Keep only features up-regulated in the group.
    min_pct : float
        Minimum fraction of cells in the group with a non-zero value.
    logfc_threshold : float, optional
        Minimum absolute log fold change. ``None`` disables the filter, which
        is needed for features that are not log expression (e.g. TF activities).
    method : str
        Test used by ``sc.tl.rank_genes_groups``.

    Returns
    -------
    pd.DataFrame
        One row per (group, feature) marker.
    """
    if groupby not in adata.obs:
        raise ValueError(f"'{groupby}' not in adata.obs")

    print(f"Finding markers for every '{groupby}' group ({method})...")
    sc.tl.rank_genes_groups(adata, groupby=groupby, method=method, pts=True, key_added=key_added)
    df = sc.get.rank_genes_groups_df(adata, group=None, key=key_added)

    if "group" not in df.columns:
        # single-group results come back without the group column
        df.insert(0, "group", adata.obs[groupby].unique()[0])

    keep = df["pct_nz_group"] >= min_pct
    if only_pos:
        keep &= df["scores"] > 0
    if logfc_threshold is not None:
        keep &= df["logfoldchanges"].abs() >= logfc_threshold
    markers = df.loc[keep].reset_index(drop=True)
    print(f"Found {len(markers)} markers across {markers['group'].nunique()} groups.")
    return markers
