"""
Quality control and preprocessing functions.
"""

from typing import Optional

import scanpy as sc
from anndata import AnnData


def calculate_qc_metrics(adata: AnnData, mt_prefix: str = "MT-") -> None:
    """
    Calculate basic quality control metrics.

    Parameters
    ----------
    adata : AnnData
        Annotated data matrix.
    mt_prefix : str, optional
        Prefix for mitochondrial genes, by default "MT-"
    """
    adata.var["mt"] = adata.var_names.str.startswith(mt_prefix)
    sc.pp.calculate_qc_metrics(
        adata, qc_vars=["mt"], percent_top=None, log1p=False, inplace=True
    )


def plot_qc_violins(adata: AnnData, save_path: str = None) -> None:
    """
    Generate and save violin plots for basic quality control metrics.

    Parameters
    ----------
    adata : AnnData
        Annotated data matrix with QC metrics calculated.
    save_path : str, optional
        Path to save the generated figure.
    """
    import matplotlib.pyplot as plt
    if not all(k in adata.obs.columns for k in ['n_genes_by_counts', 'total_counts']):
        raise ValueError("Missing QC metrics. Run `calculate_qc_metrics` first.")

    keys_to_plot = ['n_genes_by_counts', 'total_counts']
    if 'pct_counts_mt' in adata.obs.columns:
        keys_to_plot.append('pct_counts_mt')

    sc.pl.violin(adata, keys_to_plot, jitter=0.4, multi_panel=True, show=False)
    if save_path:
        plt.savefig(save_path, bbox_inches='tight', dpi=150)
    plt.close()


def filter_cells_and_genes(
    adata: AnnData,
    min_genes: int = 200,
    max_genes: Optional[int] = 2500,
    min_cells: int = 3,
    max_pct_mt: float = 5.0
) -> None:
    """
    Filter out low quality cells and rare genes.

    Parameters
    ----------
    adata : AnnData
        Annotated data matrix.
    min_genes : int, optional
        Minimum number of expressed genes for a cell to pass filtering, by default 200
    max_genes : int, optional
        Maximum number of expressed genes (putative doublets above), by default 2500
    min_cells : int, optional
        Minimum number of cells expressing a gene for it to pass filtering, by default 3
    max_pct_mt : float, optional
        Maximum allowed percentage of mitochondrial counts, by default 5.0
    """
    n_before = adata.n_obs
    sc.pp.filter_cells(adata, min_genes=min_genes)
    if max_genes is not None:
        sc.pp.filter_cells(adata, max_genes=max_genes)
    sc.pp.filter_genes(adata, min_cells=min_cells)

    # Filter by mitochondrial fraction if calculated
    if "pct_counts_mt" in adata.obs.columns:
        adata._inplace_subset_obs(adata.obs["pct_counts_mt"] < max_pct_mt)
    print(f"QC kept {adata.n_obs}/{n_before} cells and {adata.n_vars} genes.")


def normalize_and_log(adata: AnnData, target_sum: float = 1e4) -> None:
    """
    Total-count normalize (library-size correct) the data matrix to 10,000 reads per cell,
    so that counts become comparable among cells, and then logarithmize the data.
    """
    sc.pp.normalize_total(adata, target_sum=target_sum)
    sc.pp.log1p(adata)


def select_variable_genes(adata: AnnData, n_top_genes: int = 2000) -> None:
    """
    Flag highly variable genes in ``adata.var['highly_variable']``.
    Expects log-normalised data.
    """
    n_top_genes = min(n_top_genes, adata.n_vars)
    sc.pp.highly_variable_genes(adata, n_top_genes=n_top_genes, flavor="seurat")


def scale_data(adata: AnnData, max_value: Optional[float] = 10, layer_key: str = "logcounts") -> None:
    """
    Scale each gene to unit variance and zero mean, clipping at ``max_value``.
    The unscaled matrix is kept in ``adata.layers[layer_key]`` and ``adata.raw``.
    """
    adata.layers[layer_key] = adata.X.copy()
    adata.raw = adata
    sc.pp.scale(adata, max_value=max_value)
