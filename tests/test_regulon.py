import pandas as pd
import pytest

from scregulon.grn import (
    TargetProfile,
    build_regulon,
    filter_confidence,
    regulon_sizes,
    regulon_to_network,
)
from scregulon.datasets import make_mock_interactions


@pytest.fixture
def small_table():
    return pd.DataFrame(
        [
            ("TF1", "G1", 1.0, "A", 0.9),
            ("TF1", "G2", -1.0, "A", 0.8),
            ("TF2", "G1", 1.0, "B", 0.95),
            ("TF3", "G3", 1.0, "D", 1.0),
        ],
        columns=["tf", "target", "mor", "confidence", "likelihood"],
    )


@pytest.fixture
def mock_table():
    genes = [f"G{i}" for i in range(100)]
    return make_mock_interactions(genes, n_targets=12, random_state=3)


def test_three_row_example(small_table):
    regulon = build_regulon(filter_confidence(small_table, ["A", "B"]))
    assert set(regulon) == {"TF1", "TF2"}
    assert regulon["TF1"].targets == {"G1": 1.0, "G2": -1.0}
    assert regulon["TF1"].likelihood == [0.9, 0.8]
    assert regulon["TF2"].targets == {"G1": 1.0}
    assert regulon["TF2"].likelihood == [0.95]


def test_keys_match_distinct_tfs(mock_table):
    regulon = build_regulon(mock_table)
    assert set(regulon) == set(mock_table["tf"].unique())


def test_likelihood_aligned_with_targets(mock_table):
    regulon = build_regulon(mock_table)
    for profile in regulon.values():
        assert isinstance(profile, TargetProfile)
        assert len(profile.likelihood) == len(profile.targets)


def test_confidence_filter_is_monotone(mock_table):
    full = build_regulon(mock_table)
    for levels in (["A"], ["A", "B"], ["A", "B", "C"], ["C", "E"]):
        sub = build_regulon(filter_confidence(mock_table, levels))
        assert set(sub) <= set(full)
        for tf, profile in sub.items():
            assert set(profile.targets) <= set(full[tf].targets)
            assert len(profile) <= len(full[tf])


def test_duplicate_target_later_row_wins():
    table = pd.DataFrame(
        [
            ("TF1", "G1", 1.0, "A", 0.5),
            ("TF1", "G2", 1.0, "A", 0.6),
            ("TF1", "G1", -1.0, "A", 0.7),
        ],
        columns=["tf", "target", "mor", "confidence", "likelihood"],
    )
    regulon = build_regulon(table)
    assert regulon["TF1"].targets == {"G1": -1.0, "G2": 1.0}
    assert regulon["TF1"].likelihood == [0.7, 0.6]


def test_input_table_not_mutated(small_table):
    before = small_table.copy()
    build_regulon(filter_confidence(small_table, ["A"]))
    pd.testing.assert_frame_equal(small_table, before)


def test_missing_columns_raise():
    with pytest.raises(ValueError, match="likelihood"):
        build_regulon(pd.DataFrame({"tf": ["TF1"], "target": ["G1"], "mor": [1.0]}))


def test_unknown_confidence_level(small_table):
    with pytest.raises(ValueError, match="Unknown confidence"):
        filter_confidence(small_table, ["A", "Z"])


def test_network_weights(small_table):
    regulon = build_regulon(small_table)
    net = regulon_to_network(regulon).set_index(["source", "target"])["weight"]
    assert net[("TF1", "G1")] == pytest.approx(1.0)
    assert net[("TF1", "G2")] == pytest.approx(-0.8 / 0.9)

    raw = regulon_to_network(regulon, use_likelihood=False).set_index(["source", "target"])["weight"]
    assert raw[("TF1", "G2")] == -1.0


def test_regulon_sizes(small_table):
    sizes = regulon_sizes(build_regulon(small_table))
    assert sizes.to_dict() == {"TF1": 2, "TF2": 1, "TF3": 1}
