import pytest
import numpy as np
import anndata as ad
from scregulon import preprocessing as pp


@pytest.fixture
def mock_adata():
    np.random.seed(42)
    # 100 cells, 50 genes
    X = np.random.poisson(1, (100, 50)).astype(np.float32)
    obs = {"cell_id": [f"cell_{i}" for i in range(100)]}
    var = {"gene_id": [f"gene_{i}" if i >= 5 else f"MT-gene_{i}" for i in range(50)]}
    adata = ad.AnnData(X=X, obs=obs, var=var)
    adata.var_names = adata.var["gene_id"].astype(str)
    adata.obs_names = adata.obs["cell_id"].astype(str)
    return adata


def test_calculate_qc_metrics(mock_adata):
    pp.calculate_qc_metrics(mock_adata, mt_prefix="MT-")
    assert "n_genes_by_counts" in mock_adata.obs.columns
    assert "total_counts" in mock_adata.obs.columns
    assert "pct_counts_mt" in mock_adata.obs.columns
    assert mock_adata.var["mt"].sum() == 5


def test_filter_cells_and_genes(mock_adata):
    pp.calculate_qc_metrics(mock_adata, mt_prefix="MT-")
    original_cells = mock_adata.n_obs
    original_genes = mock_adata.n_vars

    pp.filter_cells_and_genes(mock_adata, min_genes=10, max_genes=45, min_cells=3, max_pct_mt=20.0)

    assert mock_adata.n_obs <= original_cells
    assert mock_adata.n_vars <= original_genes
    assert (mock_adata.obs["pct_counts_mt"] < 20.0).all()


def test_normalize_and_log(mock_adata):
    pp.normalize_and_log(mock_adata)
    assert 'log1p' in mock_adata.uns


def test_variable_genes_and_scaling(mock_adata):
    pp.normalize_and_log(mock_adata)
    pp.select_variable_genes(mock_adata, n_top_genes=20)
    assert mock_adata.var["highly_variable"].sum() == 20

    logged = mock_adata.X.copy()
    pp.scale_data(mock_adata)
    np.testing.assert_allclose(mock_adata.layers["logcounts"], logged)
    assert mock_adata.raw is not None
    assert abs(float(mock_adata.X.mean())) < 1e-3


def test_plot_qc_violins_requires_metrics(mock_adata):
    with pytest.raises(ValueError):
        pp.plot_qc_violins(mock_adata)
