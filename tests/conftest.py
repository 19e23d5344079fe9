import os
import sys

import matplotlib
matplotlib.use("Agg")

import pandas as pd
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from hypsometry_analysis import write_synthetic_dataset
from hypsometry_analysis.config import EXTREMA_FILENAME


@pytest.fixture
def scenario_dir(tmp_path):
    """Single-catchment dataset: C001 spans 1000-2000 m over 90 area units."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    pd.DataFrame({'minimum': [1000], 'maximum': [2000]}).to_csv(
        data_dir / EXTREMA_FILENAME, index=False
    )
    pd.DataFrame({
        'OBJECTID': [1, 2, 3, 4, 5],
        'ELEV': [1000, 1250, 1500, 1750, 2000],
        'AREA_GEO': [10, 20, 30, 20, 10],
        'COUNT': [100, 200, 300, 200, 100],
    }).to_csv(data_dir / "C001.csv", index=False)
    return data_dir


@pytest.fixture
def synthetic_dir(tmp_path):
    """Full 93-catchment synthetic dataset."""
    return write_synthetic_dataset(tmp_path / "synthetic")


@pytest.fixture
def small_synthetic_dir(tmp_path):
    """Five-catchment synthetic dataset, cheap enough to plot."""
    return write_synthetic_dataset(tmp_path / "small", n_catchments=5)


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "outputs"
    path.mkdir()
    return path
