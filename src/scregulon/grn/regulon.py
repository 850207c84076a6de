"""
Regulon construction from a flat TF-target interaction table.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import pandas as pd

CONFIDENCE_LEVELS = ("A", "B", "C", "D", "E")
INTERACTION_COLUMNS = ["tf", "target", "mor", "confidence", "likelihood"]
REQUIRED_COLUMNS = ["tf", "target", "mor", "likelihood"]


@dataclass
class TargetProfile:
    """
    Targets of a single TF.

    ``targets`` maps target gene -> mode of regulation (signed), and
    ``likelihood`` holds one weight per target in the iteration order of
    ``targets``.
    """
    targets: Dict[str, float] = field(default_factory=dict)
    likelihood: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.targets)


def _check_columns(table: pd.DataFrame, columns: Iterable[str]) -> None:
    missing = [c for c in columns if c not in table.columns]
    if missing:
        raise ValueError(f"Interaction table is missing required column(s): {missing}")


def filter_confidence(table: pd.DataFrame, levels: Iterable[str] = ("A", "B", "C")) -> pd.DataFrame:
    """
    Keep interactions whose confidence tier is in ``levels``.

    Parameters
    ----------
    table : pd.DataFrame
        Interaction table with a ``confidence`` column.
    levels : iterable of str
        Subset of ``CONFIDENCE_LEVELS``.

    Returns
    -------
    pd.DataFrame
        A filtered copy; the input table is left untouched.
    """
    _check_columns(table, ["confidence"])
    levels = list(levels)
    unknown = [lvl for lvl in levels if lvl not in CONFIDENCE_LEVELS]
    if unknown:
        raise ValueError(f"Unknown confidence level(s) {unknown}; expected a subset of {CONFIDENCE_LEVELS}.")
    return table[table["confidence"].isin(levels)].copy()


def build_regulon(table: pd.DataFrame) -> Dict[str, TargetProfile]:
    """
    Group an interaction table into a regulon: one ``TargetProfile`` per TF.

    Rows are read in table order. When a TF lists the same target twice the
    later row wins, for both the mode of regulation and the likelihood.

    Parameters
    ----------
    table : pd.DataFrame
        Columns ``tf``, ``target``, ``mor`` and ``likelihood``. Confidence
        filtering is expected to happen beforehand (see ``filter_confidence``).

    Returns
    -------
    dict
        TF name -> ``TargetProfile``.
    """
    _check_columns(table, REQUIRED_COLUMNS)

    regulon = {}
    for tf, group in table.groupby("tf", sort=False):
        # target -> likelihood, overwritten in row order alongside the mor mapping
        mor = {}
        weights = {}
        for target, m, lik in zip(group["target"], group["mor"], group["likelihood"]):
            mor[str(target)] = float(m)
            weights[str(target)] = float(lik)
        regulon[str(tf)] = TargetProfile(
            targets=mor,
            likelihood=[weights[t] for t in mor],
        )
    return regulon


def regulon_sizes(regulon: Dict[str, TargetProfile]) -> pd.Series:
    """Number of targets per TF."""
    return pd.Series({tf: len(profile) for tf, profile in regulon.items()}, dtype=int, name="n_targets")


def regulon_to_network(regulon: Dict[str, TargetProfile], use_likelihood: bool = True) -> pd.DataFrame:
    """
    Flatten a regulon into a long ``source``/``target``/``weight`` network.

    Parameters
    ----------
    regulon : dict
        Output of ``build_regulon``.
    use_likelihood : bool
        If True, each mode of regulation is multiplied by its likelihood
        relative to the strongest target of the same TF. If False the raw
        mode of regulation is used as the edge weight.

    Returns
    -------
    pd.DataFrame
        One row per TF-target edge.
    """
    rows = []
    for tf, profile in regulon.items():
        max_lik = max(profile.likelihood) if profile.likelihood else 0.0
        for (target, mor), lik in zip(profile.targets.items(), profile.likelihood):
            if use_likelihood and max_lik > 0:
                weight = mor * lik / max_lik
            else:
                weight = mor
            rows.append((tf, target, weight))
    return pd.DataFrame(rows, columns=["source", "target", "weight"])
