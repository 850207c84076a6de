import pytest
import numpy as np
import pandas as pd
import anndata as ad
from scregulon import tools as tl
from scregulon.datasets import make_mock_scrna
from scregulon import preprocessing as pp


@pytest.fixture
def mock_adata():
    np.random.seed(42)
    X = np.random.poisson(2, (100, 50)).astype(np.float32)
    adata = ad.AnnData(X=X)
    return adata


@pytest.fixture
def clustered_adata():
    adata = make_mock_scrna(n_cells=150, n_genes=200, n_clusters=3)
    pp.normalize_and_log(adata)
    return adata


def test_run_pca_and_neighbors(mock_adata):
    tl.run_pca_and_neighbors(mock_adata, n_pcs=10, n_neighbors=5)
    assert "X_pca" in mock_adata.obsm
    assert "neighbors" in mock_adata.uns


def test_run_pca_clamps_components():
    X = np.random.default_rng(0).normal(size=(40, 6)).astype(np.float32)
    adata = ad.AnnData(X=X)
    tl.run_pca_and_neighbors(adata, n_pcs=10, n_neighbors=5)
    assert adata.obsm["X_pca"].shape[1] == 5


def test_run_umap_and_cluster(mock_adata):
    # Need neighbors first
    tl.run_pca_and_neighbors(mock_adata, n_pcs=10, n_neighbors=5)
    tl.run_umap_and_cluster(mock_adata, resolution=0.5)

    assert "X_umap" in mock_adata.obsm
    assert "leiden_0.5" in mock_adata.obs.columns


def test_find_all_markers(clustered_adata):
    markers = tl.find_all_markers(clustered_adata, groupby="true_cluster")
    assert set(markers["group"]) <= set(clustered_adata.obs["true_cluster"].cat.categories)
    assert (markers["scores"] > 0).all()
    assert (markers["pct_nz_group"] >= 0.25).all()
    assert (markers["logfoldchanges"].abs() >= 0.25).all()


def test_find_all_markers_unknown_group(clustered_adata):
    with pytest.raises(ValueError):
        tl.find_all_markers(clustered_adata, groupby="missing")


def test_annotate_clusters(clustered_adata):
    tl.annotate_clusters(clustered_adata, {"0": "T", "1": "B"}, groupby="true_cluster")
    labels = set(clustered_adata.obs["cell_type"])
    assert labels == {"T", "B", "2"}


def test_score_cell_types(clustered_adata):
    tl.score_cell_types(clustered_adata, groupby="true_cluster")
    assert "cell_type" in clustered_adata.obs
    assert clustered_adata.obs["cell_type"].notna().all()
    assert set(clustered_adata.obs["cell_type"]) <= set(tl.PBMC_MARKERS) | {"Unknown"}
