from .pca_umap import run_pca_and_neighbors, run_umap_and_cluster
from .markers import find_all_markers
from .cell_type import PBMC_MARKERS, score_cell_types, annotate_clusters

__all__ = [
    "run_pca_and_neighbors",
    "run_umap_and_cluster",
    "find_all_markers",
    "PBMC_MARKERS",
    "score_cell_types",
    "annotate_clusters",
]
