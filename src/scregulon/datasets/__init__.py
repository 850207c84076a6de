from .mock_data import make_mock_scrna, make_mock_interactions
from .io import read_10x, read_interactions, load_dorothea

__all__ = ["make_mock_scrna", "make_mock_interactions", "read_10x", "read_interactions", "load_dorothea"]
