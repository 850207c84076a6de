"""
Assign cell types to clusters from canonical PBMC markers.
"""

from typing import Dict

from anndata import AnnData
import scanpy as sc

PBMC_MARKERS = {
    "Naive CD4 T": ["IL7R", "CCR7"],
    "Memory CD4 T": ["IL7R", "S100A4"],
    "CD14+ Mono": ["CD14", "LYZ"],
    "B": ["MS4A1"],
    "CD8 T": ["CD8A"],
    "FCGR3A+ Mono": ["FCGR3A", "MS4A7"],
    "NK": ["GNLY", "NKG7"],
    "DC": ["FCER1A", "CST3"],
    "Platelet": ["PPBP"],
}


def score_cell_types(
    adata: AnnData,
    marker_dict: Dict[str, list] = None,
    groupby: str = 'leiden_0.5',
    key_added: str = 'cell_type',
) -> AnnData:
    """
    Score and assign putative cell types using a dictionary of marker genes.

    Parameters
    ----------
    adata : AnnData
    marker_dict : dict — {cell_type: [gene1, gene2, ...]}, PBMC_MARKERS by default
    groupby : str — cluster key in adata.obs
    key_added : str — obs column receiving the labels

    Returns
    -------
    AnnData with ``key_added`` added to adata.obs.
    """
    if marker_dict is None:
        marker_dict = PBMC_MARKERS
    if groupby not in adata.obs:
        raise ValueError(f"'{groupby}' not in adata.obs")

    print("Scoring cell types based on marker signatures...")
    score_names = []
    for celltype, genes in marker_dict.items():
        valid_genes = [g for g in genes if g in adata.var_names]
        if valid_genes:
            score_name = f'score_{celltype}'
            sc.tl.score_genes(adata, gene_list=valid_genes, score_name=score_name)
            score_names.append(score_name)

    if not score_names:
        raise ValueError("None of the marker genes are present in the data.")

    cluster_mapping = {}
    for cluster in adata.obs[groupby].unique():
        cluster_cells = adata.obs[adata.obs[groupby] == cluster]
        means = {score: cluster_cells[score].mean() for score in score_names}
        best_match = max(means, key=means.get).replace('score_', '')
        cluster_mapping[str(cluster)] = "Unknown" if all(m < 0 for m in means.values()) else best_match

    return annotate_clusters(adata, cluster_mapping, groupby=groupby, key_added=key_added)


def annotate_clusters(
    adata: AnnData,
    mapping: Dict[str, str],
    groupby: str = 'leiden_0.5',
    key_added: str = 'cell_type',
) -> AnnData:
    """
    Rename clusters with an explicit cluster -> label mapping.
    Clusters absent from ``mapping`` keep their original identifier.
    """
    if groupby not in adata.obs:
        raise ValueError(f"'{groupby}' not in adata.obs")
    clusters = adata.obs[groupby].astype(str)
    labels = clusters.map(lambda c: mapping.get(c, c))
    adata.obs[key_added] = labels.astype("category")
    print(f"Cell types in `adata.obs['{key_added}']`: {sorted(set(labels))}")
    return adata
