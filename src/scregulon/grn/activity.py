"""
Transcription Factor (TF) activity inference with VIPER over a DoRothEA-style regulon.
"""

from contextlib import contextmanager
from typing import Dict, List, Optional, Union

import numpy as np
import pandas as pd
import numba
import scanpy as sc
from anndata import AnnData

from .inputs import AnnDataInput, LayerInput
from .options import ViperOptions
from .regulon import TargetProfile, regulon_to_network

try:
    import decoupler as dc
    DECOUPLER_AVAILABLE = True
except ImportError:
    DECOUPLER_AVAILABLE = False

# 1.4826 * MAD estimates the standard deviation of normally distributed data
MAD_CONSTANT = 1.4826


def compute_signature(matrix: pd.DataFrame, method: str = "scale") -> pd.DataFrame:
    """
    Transform a genes x cells expression matrix into a gene expression signature.

    Parameters
    ----------
    matrix : pd.DataFrame
        Genes (rows) x cells (columns).
    method : str
        'scale'  : centre and scale each gene across cells.
        'rank'   : rank genes within each cell, then centre each gene on its median rank.
        'mad'    : centre each gene on its median and divide by its MAD.
        'none'   : use the matrix as-is.

    Returns
    -------
    pd.DataFrame
        Signature with the same orientation. Genes whose transform is not
        finite (constant genes for 'scale' and 'mad') are dropped.
    """
    if method == "scale":
        sig = matrix.sub(matrix.mean(axis=1), axis=0).div(matrix.std(axis=1, ddof=1), axis=0)
    elif method == "rank":
        ranks = matrix.rank(axis=0)
        sig = ranks.sub(ranks.median(axis=1), axis=0)
    elif method == "mad":
        med = matrix.median(axis=1)
        centred = matrix.sub(med, axis=0)
        mad = centred.abs().median(axis=1) * MAD_CONSTANT
        sig = centred.div(mad, axis=0)
    elif method == "none":
        sig = matrix
    else:
        raise ValueError(f"Unknown signature method '{method}'.")

    finite = np.isfinite(sig.to_numpy()).all(axis=1)
    return sig.loc[finite]


@contextmanager
def _scoped_n_jobs(cores: int):
    # VIPER kernels run on numba threads; scanpy reads its own setting
    previous_threads = numba.get_num_threads()
    previous_jobs = sc.settings.n_jobs
    numba.set_num_threads(min(cores, numba.config.NUMBA_NUM_THREADS))
    sc.settings.n_jobs = cores
    try:
        yield
    finally:
        numba.set_num_threads(previous_threads)
        sc.settings.n_jobs = previous_jobs


def _resolve_options(options) -> ViperOptions:
    if options is None:
        return ViperOptions()
    if isinstance(options, dict):
        return ViperOptions.from_dict(options)
    return options


def score_activity(
    expression,
    regulon: Dict[str, TargetProfile],
    options: Optional[Union[ViperOptions, dict]] = None,
) -> pd.DataFrame:
    """
    Infer per-cell TF activities with VIPER.

    Parameters
    ----------
    expression : AnnDataInput, LayerInput or MatrixInput
        Source of the genes x cells expression matrix.
    regulon : dict
        TF name -> ``TargetProfile`` as returned by ``build_regulon``.
    options : ViperOptions or dict, optional
        Scoring configuration. A plain dict is converted with
        ``ViperOptions.from_dict``.

    Returns
    -------
    pd.DataFrame
        TFs (rows) x cells (columns) normalised enrichment scores. TFs with
        fewer than ``options.minsize`` targets in the data are absent. Cells
        the routine could not score are NaN.
    """
    if not DECOUPLER_AVAILABLE:
        raise ImportError("decoupler not installed. pip install decoupler")

    options = _resolve_options(options)

    mat = expression.as_expression_matrix()
    cells = mat.columns
    net = regulon_to_network(regulon, use_likelihood=options.use_likelihood)

    if options.eset_filter:
        # targets plus the TFs themselves
        keep = set(net["target"]) | set(regulon)
        mat = mat.loc[mat.index.isin(keep)]

    sig = compute_signature(mat, options.method)
    if options.verbose:
        print(f"[VIPER] Scoring {len(regulon)} regulons on {sig.shape[0]} genes x {sig.shape[1]} cells "
              f"(method='{options.method}', minsize={options.minsize})...")

    kwargs = options.routine_kwargs()
    kwargs.setdefault("empty", False)
    with _scoped_n_jobs(options.cores):
        es, _ = dc.mt.viper(sig.T, net, **kwargs)

    activity = es.T.reindex(columns=cells)
    if options.verbose:
        print(f"[VIPER] Scored {activity.shape[0]} TFs.")
    return activity


def activity_to_anndata(
    activity: pd.DataFrame,
    obs: Optional[pd.DataFrame] = None,
    fillna: Optional[float] = None,
) -> AnnData:
    """
    Wrap a TFs x cells activity matrix into a cells x TFs AnnData.

    Parameters
    ----------
    activity : pd.DataFrame
        Output of ``score_activity``.
    obs : pd.DataFrame, optional
        Cell metadata; rows are aligned to the activity columns.
    fillna : float, optional
        Replace unscored entries with this value.
    """
    df = activity.T
    if fillna is not None:
        df = df.fillna(fillna)
    obs_df = obs.loc[df.index].copy() if obs is not None else pd.DataFrame(index=df.index)
    tf_adata = AnnData(X=df.to_numpy(dtype=np.float32), obs=obs_df)
    tf_adata.var_names = df.columns.astype(str)
    return tf_adata


def run_tf_activity(
    adata: AnnData,
    regulon: Dict[str, TargetProfile],
    options: Optional[Union[ViperOptions, dict]] = None,
    layer: Optional[str] = None,
    use_raw: bool = False,
    key_added: str = "X_viper",
) -> AnnData:
    """
    Score TF activities for an AnnData object.

    Parameters
    ----------
    adata : AnnData
        Log-normalised data, in ``adata.X`` or in ``adata.layers[layer]``.
    regulon : dict
        Output of ``build_regulon``.
    options : ViperOptions or dict, optional
        Scoring configuration.
    layer : str, optional
        Read expression from this layer instead of ``adata.X``.
    use_raw : bool
        Read expression from ``adata.raw`` (ignored when ``layer`` is given).
    key_added : str
        Key in ``adata.obsm`` receiving the cells x TFs score frame.

    Returns
    -------
    AnnData
        Cells x TFs activity object sharing ``adata.obs``.
    """
    if layer is not None:
        source = LayerInput(adata, layer=layer)
    else:
        source = AnnDataInput(adata, use_raw=use_raw)

    options = _resolve_options(options)
    activity = score_activity(source, regulon, options)
    adata.obsm[key_added] = activity.T.loc[adata.obs_names]
    if options.verbose:
        print(f"Stored {activity.shape[0]} TF activities in adata.obsm['{key_added}'].")
    return activity_to_anndata(activity, obs=adata.obs)


def summarize_by_group(tf_adata: AnnData, groupby: str) -> pd.DataFrame:
    """
    Mean TF activity per group.

    Returns
    -------
    pd.DataFrame
        Groups (rows) x TFs (columns).
    """
    if groupby not in tf_adata.obs:
        raise ValueError(f"'{groupby}' not in adata.obs")
    X = tf_adata.X.toarray() if hasattr(tf_adata.X, "toarray") else tf_adata.X
    df = pd.DataFrame(X, index=tf_adata.obs_names, columns=tf_adata.var_names)
    return df.groupby(tf_adata.obs[groupby], observed=True).mean()


def select_variable_tfs(summary: pd.DataFrame, n_tfs: int = 180) -> List[str]:
    """
    TFs with the highest activity variance across groups.

    Parameters
    ----------
    summary : pd.DataFrame
        Groups x TFs, e.g. from ``summarize_by_group``.
    n_tfs : int
        Number of TFs to keep. All TFs are returned when fewer exist.
    """
    variances = summary.var(axis=0).sort_values(ascending=False)
    return variances.head(n_tfs).index.tolist()
