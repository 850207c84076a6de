"""
Expression inputs accepted by the activity scorer.

Each adapter resolves to a dense genes x cells ``pd.DataFrame`` through
``as_expression_matrix``. The adapter is chosen by the caller, so the scorer
never inspects container types itself.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd
import scipy.sparse as sp
from anndata import AnnData


def _dense(X) -> np.ndarray:
    if sp.issparse(X):
        X = X.toarray()
    return np.asarray(X, dtype=float)


@dataclass
class AnnDataInput:
    """Normalised expression stored in ``adata.X`` (or ``adata.raw.X``)."""
    adata: AnnData
    use_raw: bool = False
    kind = "anndata"

    def as_expression_matrix(self) -> pd.DataFrame:
        if self.use_raw:
            if self.adata.raw is None:
                raise ValueError("use_raw=True but adata.raw is not set.")
            X = self.adata.raw.X
            genes = self.adata.raw.var_names
        else:
            X = self.adata.X
            genes = self.adata.var_names
        return pd.DataFrame(_dense(X).T, index=genes, columns=self.adata.obs_names)


@dataclass
class LayerInput:
    """Normalised counts stored in a named layer, ``logcounts`` by default."""
    adata: AnnData
    layer: str = "logcounts"
    kind = "layer"

    def as_expression_matrix(self) -> pd.DataFrame:
        if self.layer not in self.adata.layers:
            raise KeyError(f"Layer '{self.layer}' not found in adata.layers.")
        X = self.adata.layers[self.layer]
        return pd.DataFrame(_dense(X).T, index=self.adata.var_names, columns=self.adata.obs_names)


@dataclass
class MatrixInput:
    """A genes x cells matrix, used as-is."""
    matrix: pd.DataFrame
    kind = "matrix"

    def as_expression_matrix(self) -> pd.DataFrame:
        return self.matrix.astype(float)
