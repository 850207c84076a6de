"""
Basic scRNA-seq tools: PCA, neighbours, UMAP and Leiden clustering.
"""

import scanpy as sc
from anndata import AnnData


def run_pca_and_neighbors(adata: AnnData, n_pcs: int = 10, n_neighbors: int = 30, random_state: int = 42) -> AnnData:
    # arpack needs strictly fewer components than either dimension
    n_pcs = min(n_pcs, adata.n_obs - 1, adata.n_vars - 1)
    sc.tl.pca(adata, svd_solver='arpack', n_comps=n_pcs, random_state=random_state)
    sc.pp.neighbors(adata, n_neighbors=n_neighbors, n_pcs=n_pcs, random_state=random_state)
    return adata


def run_umap_and_cluster(adata: AnnData, resolution: float = 0.5, random_state: int = 42) -> AnnData:
    sc.tl.umap(adata, random_state=random_state)
    sc.tl.leiden(adata, resolution=resolution, key_added=f'leiden_{resolution}', random_state=random_state)
    return adata
