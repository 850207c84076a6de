"""
Dataset generation utilities.
"""

import numpy as np
import anndata as ad
import pandas as pd

from ..grn.regulon import CONFIDENCE_LEVELS

# Predefined list of common human PBMC marker genes for actual biological context
MARKER_GENES = [
    "IL7R", "CCR7", "S100A4", "CD14", "LYZ", "MS4A1", "CD8A",
    "FCGR3A", "MS4A7", "GNLY", "NKG7", "FCER1A", "CST3", "PPBP",
    "CD3D", "CD3E", "CD79A", "SELL", "GZMB", "PRF1",
]

MOCK_TFS = [
    "SPI1", "CEBPA", "CEBPB", "PAX5", "EBF1", "TCF7", "LEF1", "GATA3",
    "TBX21", "EOMES", "IRF4", "IRF8", "STAT1", "STAT3", "RUNX3", "FOXP3",
    "NFKB1", "RELA", "MYC", "JUN",
]

MT_GENES = ["MT-CO1", "MT-CO2", "MT-ND1", "MT-ATP6"]


def make_mock_scrna(n_cells: int = 300, n_genes: int = 400, n_clusters: int = 4, random_state: int = 42) -> ad.AnnData:
    """
    Generate a mock scRNA-seq AnnData object with defined clusters.

    Parameters
    ----------
    n_cells : int
        Number of cells
    n_genes : int
        Number of genes (at least the number of built-in marker, TF and MT genes)
    n_clusters : int
        Number of synthetic cell types/clusters to simulate

    Returns
    -------
    anndata.AnnData
        Raw integer counts in ``X``; ``obs['true_cluster']`` holds the simulated labels.
    """
    from sklearn.datasets import make_blobs
    rng = np.random.default_rng(random_state)

    named = MARKER_GENES + MOCK_TFS + MT_GENES
    if n_genes < len(named):
        raise ValueError(f"n_genes must be at least {len(named)}.")

    # 1. Cluster structure on the informative genes (markers + TFs)
    n_informative = len(MARKER_GENES) + len(MOCK_TFS)
    X, y = make_blobs(n_samples=n_cells, n_features=n_informative, centers=n_clusters,
                      cluster_std=1.0, random_state=random_state)
    X = X - X.min() + 0.1

    # 2. Baseline noise for mitochondrial and background genes
    noise = rng.lognormal(mean=0.5, sigma=0.5, size=(n_cells, n_genes - n_informative))
    X = np.hstack([X, noise])

    # Scale to typical library sizes (~5000 mean UMI per cell)
    X = X / X.sum(axis=1, keepdims=True) * rng.normal(5000, 1000, size=(n_cells, 1)).clip(min=1000)

    # 3. Sample from Poisson to get integer counts
    X_counts = rng.poisson(X).astype(np.float32)

    gene_names = named + [f"GENE{i}" for i in range(n_genes - len(named))]

    obs = pd.DataFrame(
        {"true_cluster": pd.Categorical([str(c) for c in y])},
        index=[f"cell_{i}" for i in range(n_cells)],
    )
    var = pd.DataFrame(index=gene_names)
    return ad.AnnData(X=X_counts, obs=obs, var=var)


def make_mock_interactions(
    genes,
    tfs=None,
    n_targets: int = 15,
    random_state: int = 0,
) -> pd.DataFrame:
    """
    Generate a DoRothEA-like TF-target table over a given gene universe.

    Parameters
    ----------
    genes : sequence of str
        Candidate target genes.
    tfs : sequence of str, optional
        TF names; defaults to ``MOCK_TFS``.
    n_targets : int
        Targets drawn per TF.

    Returns
    -------
    pd.DataFrame
        Columns tf, target, mor, confidence, likelihood.
    """
    rng = np.random.default_rng(random_state)
    tfs = list(MOCK_TFS if tfs is None else tfs)
    genes = np.asarray(list(genes))
    n_targets = min(n_targets, len(genes))

    rows = []
    for tf in tfs:
        level = CONFIDENCE_LEVELS[rng.integers(len(CONFIDENCE_LEVELS))]
        for target in rng.choice(genes, size=n_targets, replace=False):
            rows.append({
                "tf": tf,
                "target": str(target),
                "mor": float(rng.choice([-1.0, 1.0], p=[0.25, 0.75])),
                "confidence": level,
                "likelihood": 1.0,
            })
    return pd.DataFrame(rows, columns=["tf", "target", "mor", "confidence", "likelihood"])
