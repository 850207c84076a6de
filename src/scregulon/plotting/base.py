"""
Embedding plots in the style of SeuratExtend's DimPlot / FeaturePlot.
"""

from typing import List, Optional, Union

import matplotlib.pyplot as plt
import scanpy as sc
from anndata import AnnData

from .style import FEATURE_CMAP, discrete_colors, set_style


def dim_plot(
    adata: AnnData,
    color: Union[str, List[str]],
    basis: str = "umap",
    title: Optional[str] = None,
    show: bool = True,
    save_path: Optional[str] = None,
    **kwargs
) -> Optional[plt.Axes]:
    """
    A customized wrapper around sc.pl.embedding to simulate SeuratExtend DimPlot.

    Parameters
    ----------
    adata : AnnData
        Annotated data matrix.
    color : str or list of str
        Keys for annotations of observations/cells or variables/genes.
    basis : str, optional
        String indicating the basis to use., by default "umap"
    save_path : str, optional
        Path to save the generated figure.

    Returns
    -------
    Axes or None
        Returns axes, list of axes, or None if `show` is True.
    """
    set_style()

    colors = [color] if isinstance(color, str) else color
    for c in colors:
        if c in adata.obs.columns and adata.obs[c].dtype.name in ['category', 'object']:
            n_cats = adata.obs[c].nunique()
            adata.uns[f"{c}_colors"] = discrete_colors(n_cats)

    ax = sc.pl.embedding(
        adata,
        basis=basis,
        color=color,
        frameon=False,
        title=title if title else color,
        show=False,
        **kwargs
    )

    if save_path:
        plt.savefig(save_path, bbox_inches='tight', dpi=150)
    if show:
        plt.show()
        return None
    return ax


def feature_plot(
    adata: AnnData,
    features: Union[str, List[str]],
    basis: str = "umap",
    cmap: str = FEATURE_CMAP,
    show: bool = True,
    save_path: Optional[str] = None,
    **kwargs
) -> Optional[plt.Axes]:
    """
    Plot feature values (genes or TF activities) on an embedding, like Seurat's FeaturePlot.
    """
    set_style()

    ax = sc.pl.embedding(
        adata,
        basis=basis,
        color=features,
        color_map=cmap,
        frameon=False,
        show=False,
        **kwargs
    )

    if save_path:
        plt.savefig(save_path, bbox_inches='tight', dpi=150)
    if show:
        plt.show()
        return None
    return ax
