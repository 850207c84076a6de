from .regulon import (
    CONFIDENCE_LEVELS,
    TargetProfile,
    build_regulon,
    filter_confidence,
    regulon_sizes,
    regulon_to_network,
)
from .inputs import AnnDataInput, LayerInput, MatrixInput
from .options import ViperOptions
from .activity import (
    activity_to_anndata,
    compute_signature,
    run_tf_activity,
    score_activity,
    select_variable_tfs,
    summarize_by_group,
)

__all__ = [
    "CONFIDENCE_LEVELS",
    "TargetProfile",
    "build_regulon",
    "filter_confidence",
    "regulon_sizes",
    "regulon_to_network",
    "AnnDataInput",
    "LayerInput",
    "MatrixInput",
    "ViperOptions",
    "activity_to_anndata",
    "compute_signature",
    "run_tf_activity",
    "score_activity",
    "select_variable_tfs",
    "summarize_by_group",
]
