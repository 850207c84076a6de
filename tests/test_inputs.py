import anndata as ad
import numpy as np
import pandas as pd
import pytest
import scipy.sparse as sp

from scregulon.grn import AnnDataInput, LayerInput, MatrixInput


@pytest.fixture
def mock_adata():
    np.random.seed(0)
    X = np.random.poisson(2, (6, 4)).astype(np.float32)
    adata = ad.AnnData(
        X=sp.csr_matrix(X),
        obs=pd.DataFrame(index=[f"cell_{i}" for i in range(6)]),
        var=pd.DataFrame(index=[f"gene_{i}" for i in range(4)]),
    )
    adata.layers["logcounts"] = np.log1p(X)
    return adata


def test_anndata_input_is_genes_by_cells(mock_adata):
    mat = AnnDataInput(mock_adata).as_expression_matrix()
    assert mat.shape == (4, 6)
    assert list(mat.index) == list(mock_adata.var_names)
    assert list(mat.columns) == list(mock_adata.obs_names)
    np.testing.assert_allclose(mat.to_numpy(), mock_adata.X.toarray().T)


def test_layer_input(mock_adata):
    mat = LayerInput(mock_adata).as_expression_matrix()
    np.testing.assert_allclose(mat.to_numpy(), mock_adata.layers["logcounts"].T)


def test_missing_layer(mock_adata):
    with pytest.raises(KeyError):
        LayerInput(mock_adata, layer="counts").as_expression_matrix()


def test_raw_without_raw(mock_adata):
    with pytest.raises(ValueError):
        AnnDataInput(mock_adata, use_raw=True).as_expression_matrix()


def test_matrix_input_used_as_is():
    df = pd.DataFrame([[1, 2], [3, 4]], index=["g1", "g2"], columns=["c1", "c2"])
    mat = MatrixInput(df).as_expression_matrix()
    pd.testing.assert_frame_equal(mat, df.astype(float))


def test_variant_tags(mock_adata):
    assert AnnDataInput(mock_adata).kind == "anndata"
    assert LayerInput(mock_adata).kind == "layer"
    assert MatrixInput(pd.DataFrame()).kind == "matrix"
