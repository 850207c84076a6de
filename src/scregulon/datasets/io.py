"""
Data input functions for CellRanger output and TF-target interaction tables.
"""

from typing import Iterable, Optional

import pandas as pd
import scanpy as sc
from anndata import AnnData

from ..grn.regulon import INTERACTION_COLUMNS


def read_10x(path: str, is_h5: bool = False) -> AnnData:
    """
    Read output from 10x Genomics CellRanger.

    Parameters
    ----------
    path : str
        Path to the 10x output directory (containing matrix.mtx, features.tsv, barcodes.tsv)
        or path to an hdf5 file (filtered_feature_bc_matrix.h5).
    is_h5 : bool
        If True, reads an h5 file instead of an mtx directory.
    """
    print(f"Reading 10x CellRanger data from: {path}")
    if is_h5:
        adata = sc.read_10x_h5(path)
    else:
        adata = sc.read_10x_mtx(path, var_names='gene_symbols', cache=True)
    adata.var_names_make_unique()
    return adata


def _normalize_interactions(table: pd.DataFrame) -> pd.DataFrame:
    if "likelihood" not in table.columns:
        table = table.assign(likelihood=1.0)
    missing = [c for c in INTERACTION_COLUMNS if c not in table.columns]
    if missing:
        raise ValueError(f"Interaction table is missing required column(s): {missing}")
    table = table[INTERACTION_COLUMNS + [c for c in table.columns if c not in INTERACTION_COLUMNS]]
    return table.astype({"tf": str, "target": str, "confidence": str, "mor": float, "likelihood": float})


def read_interactions(source: str, sep: Optional[str] = None) -> pd.DataFrame:
    """
    Read a TF-target interaction table from a local file or URL.

    Parameters
    ----------
    source : str
        Path or URL of a delimited file with columns
        tf, target, mor, confidence and likelihood.
    sep : str, optional
        Field separator. Inferred from the file suffix when omitted
        (tab for .tsv/.txt, comma otherwise).

    Returns
    -------
    pd.DataFrame
    """
    if sep is None:
        stripped = source.split("?")[0].lower()
        if stripped.endswith(".gz"):
            stripped = stripped[:-3]
        sep = "\t" if stripped.endswith((".tsv", ".txt")) else ","
    print(f"Reading TF-target interactions from: {source}")
    table = pd.read_csv(source, sep=sep)
    table = _normalize_interactions(table)
    print(f"Loaded {len(table)} interactions for {table['tf'].nunique()} TFs.")
    return table


def load_dorothea(organism: str = "human", levels: Iterable[str] = ("A", "B", "C")) -> pd.DataFrame:
    """
    Fetch the DoRothEA regulon resource through decoupler/OmniPath.

    Returns
    -------
    pd.DataFrame
        Interaction table with columns tf, target, mor, confidence, likelihood.
    """
    try:
        import decoupler as dc
    except ImportError:
        raise ImportError("decoupler not installed. pip install decoupler")

    print(f"Downloading DoRothEA ({organism}, levels {list(levels)})...")
    net = dc.op.dorothea(organism=organism, levels=list(levels))
    table = net.rename(columns={"source": "tf", "weight": "mor"})
    return _normalize_interactions(table)
