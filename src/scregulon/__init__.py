"""
scregulon: transcription factor activity inference for scRNA-seq with DoRothEA regulons and VIPER.
"""

__version__ = "0.1.0"

from . import preprocessing as pp
from . import tools as tl
from . import plotting as pl
from . import datasets
from . import grn
from .workflow import run_workflow, WorkflowResult

__all__ = [
    "pp",
    "tl",
    "pl",
    "datasets",
    "grn",
    "run_workflow",
    "WorkflowResult",
]
