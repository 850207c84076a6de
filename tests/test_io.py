import pandas as pd
import pytest

from scregulon.datasets import read_interactions, make_mock_interactions
from scregulon.grn import build_regulon, filter_confidence


def test_read_tsv(tmp_path):
    path = tmp_path / "regulons.tsv"
    path.write_text(
        "tf\tconfidence\ttarget\tmor\tlikelihood\n"
        "TF1\tA\tG1\t1\t0.9\n"
        "TF1\tA\tG2\t-1\t0.8\n"
        "TF2\tB\tG1\t1\t0.95\n"
    )
    table = read_interactions(str(path))
    assert list(table.columns[:5]) == ["tf", "target", "mor", "confidence", "likelihood"]
    regulon = build_regulon(filter_confidence(table, ["A", "B"]))
    assert regulon["TF1"].targets == {"G1": 1.0, "G2": -1.0}


def test_read_csv_without_likelihood(tmp_path):
    path = tmp_path / "regulons.csv"
    pd.DataFrame({"tf": ["TF1"], "target": ["G1"], "mor": [1], "confidence": ["C"]}).to_csv(path, index=False)
    table = read_interactions(str(path))
    assert table["likelihood"].tolist() == [1.0]


def test_read_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"tf": ["TF1"], "target": ["G1"]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="missing"):
        read_interactions(str(path))


def test_mock_interactions():
    table = make_mock_interactions([f"G{i}" for i in range(30)], tfs=["A1", "A2"], n_targets=10)
    assert len(table) == 20
    assert table.groupby("tf")["target"].nunique().tolist() == [10, 10]
