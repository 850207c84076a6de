"""
Options for VIPER-based TF activity scoring.
"""

import warnings
from dataclasses import dataclass, field, fields
from typing import Any, Dict

SIGNATURE_METHODS = ("scale", "rank", "mad", "none")

# Structural arguments of the scoring routine; always taken from the scorer's own inputs.
RESERVED_KEYS = ("data", "mat", "eset", "expression", "net", "regulon")

# R-style option names accepted by ``ViperOptions.from_dict``
_ALIASES = {
    "eset.filter": "eset_filter",
    "batch.size": "batch_size",
    "use.likelihood": "use_likelihood",
}


@dataclass
class ViperOptions:
    """
    Configuration of ``score_activity``.

    Parameters
    ----------
    method : str
        Signature transform applied per gene before scoring:
        'scale' (z-score), 'rank' (median-centred ranks), 'mad' (robust
        z-score) or 'none'.
    minsize : int
        Minimum number of targets a TF needs to be scored. Smaller regulons
        are dropped from the output.
    eset_filter : bool
        Keep only genes that are a target of some TF, or a TF themselves,
        before the transform.
    cores : int
        Number of numba threads used by the scoring routine (capped at
        ``numba.config.NUMBA_NUM_THREADS``), restored after the call.
    verbose : bool
        Print progress messages.
    use_likelihood : bool
        Weight each edge by its relative likelihood.
    batch_size : int
        Number of cells scored per batch; bounds the memory of a single call.
    extra : dict
        Additional keyword arguments passed to ``decoupler.mt.viper``
        (e.g. ``pleiotropy``). Keys naming the expression matrix or the
        network are ignored.
    """
    method: str = "scale"
    minsize: int = 4
    eset_filter: bool = False
    cores: int = 1
    verbose: bool = False
    use_likelihood: bool = True
    batch_size: int = 10000
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.method not in SIGNATURE_METHODS:
            raise ValueError(f"method must be one of {SIGNATURE_METHODS}, got '{self.method}'.")
        if int(self.minsize) < 1:
            raise ValueError(f"minsize must be >= 1, got {self.minsize}.")
        if int(self.cores) < 1:
            raise ValueError(f"cores must be >= 1, got {self.cores}.")
        if int(self.batch_size) < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}.")
        self.minsize = int(self.minsize)
        self.cores = int(self.cores)
        self.batch_size = int(self.batch_size)

        extra = dict(self.extra)
        dropped = [k for k in RESERVED_KEYS if k in extra]
        for k in dropped:
            del extra[k]
        if dropped:
            warnings.warn(f"Ignoring option(s) {dropped}: the expression matrix and regulon "
                          "are always taken from the scorer arguments.")
        self.extra = extra

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> "ViperOptions":
        """
        Build options from a plain mapping such as
        ``{"method": "scale", "minsize": 4, "eset.filter": False}``.

        Unrecognised keys are collected into ``extra``.
        """
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs = {}
        extra = dict(options.get("extra", {}))
        for key, value in options.items():
            if key == "extra":
                continue
            name = _ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                extra[key] = value
        return cls(extra=extra, **kwargs)

    def routine_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the enrichment routine, structural arguments excluded."""
        kwargs = dict(self.extra)
        kwargs.update(tmin=self.minsize, bsize=self.batch_size, verbose=self.verbose)
        return kwargs
