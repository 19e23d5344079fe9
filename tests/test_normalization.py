"""Tests for relative elevation and cumulative relative area."""

import numpy as np
import pandas as pd
import pytest

from hypsometry_analysis.config import EXTREMA_FILENAME, N_CATCHMENTS
from hypsometry_analysis.data_loading import (
    catchment_id, get_catchment_extrema, load_catchment_table, load_extrema_table,
)
from hypsometry_analysis.exceptions import DegenerateRangeError
from hypsometry_analysis.normalization import (
    normalize_catchment, normalize_cumulative_area, normalize_elevation, total_area,
)


def test_scenario_values(scenario_dir):
    table = load_catchment_table("C001", scenario_dir)

    result = normalize_catchment(table, 1000, 2000)

    np.testing.assert_allclose(result['ELEV_NORM'], [0, 0.25, 0.5, 0.75, 1.0])
    np.testing.assert_allclose(result['AREA_NORM'], [10 / 90, 30 / 90, 60 / 90, 80 / 90, 1.0])
    assert total_area(table) == 90


def test_preserves_rows_and_order():
    table = pd.DataFrame({'ELEV': [10.0, 20.0, 30.0], 'AREA_GEO': [3.0, 1.0, 2.0]})

    result = normalize_catchment(table, 10, 30)

    assert len(result) == len(table)
    assert result['ELEV'].tolist() == [10.0, 20.0, 30.0]
    np.testing.assert_allclose(result['AREA_NORM'], [0.5, 4 / 6, 1.0])


def test_equal_extrema_raise():
    with pytest.raises(DegenerateRangeError):
        normalize_elevation([500, 500], 500, 500)


def test_inverted_extrema_raise():
    with pytest.raises(DegenerateRangeError):
        normalize_elevation([500, 600], 600, 500)


def test_zero_total_area_raises():
    with pytest.raises(DegenerateRangeError):
        normalize_cumulative_area([0, 0, 0])


def test_zero_area_classes_allowed():
    relative = normalize_cumulative_area([0, 2, 0, 2])
    np.testing.assert_allclose(relative, [0, 0.5, 0.5, 1.0])


def test_all_synthetic_catchments_span_unit_square(synthetic_dir):
    extrema = load_extrema_table(synthetic_dir / EXTREMA_FILENAME)

    for index in range(1, N_CATCHMENTS + 1):
        table = load_catchment_table(catchment_id(index), synthetic_dir)
        minimum, maximum = get_catchment_extrema(extrema, index)
        result = normalize_catchment(table, minimum, maximum)

        area = result['AREA_NORM'].to_numpy()
        elev = result['ELEV_NORM'].to_numpy()
        assert np.all(np.diff(area) >= 0)
        assert area[-1] == pytest.approx(1.0, abs=1e-9)
        assert elev[0] == pytest.approx(0.0, abs=1e-9)
        assert elev[-1] == pytest.approx(1.0, abs=1e-9)
