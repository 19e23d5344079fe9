"""Tests for catchment codes and input table loading."""

import pandas as pd
import pytest

from hypsometry_analysis.config import EXTREMA_FILENAME, N_CATCHMENTS
from hypsometry_analysis.data_loading import (
    catchment_id,
    get_catchment_extrema,
    load_catchment_table,
    load_extrema_table,
    quick_data_check,
    validate_extrema_coverage,
)
from hypsometry_analysis.exceptions import MalformedTableError, MissingDataError


class TestCatchmentId:

    @pytest.mark.parametrize("index, expected", [
        (1, "C001"), (9, "C009"), (10, "C010"), (42, "C042"), (93, "C093"),
    ])
    def test_zero_padded_codes(self, index, expected):
        assert catchment_id(index) == expected

    def test_codes_are_four_characters(self):
        assert all(len(catchment_id(i)) == 4 for i in range(1, N_CATCHMENTS + 1))

    @pytest.mark.parametrize("index", [0, -1, 1000])
    def test_out_of_range(self, index):
        with pytest.raises(ValueError):
            catchment_id(index)

    def test_non_integer(self):
        with pytest.raises(TypeError):
            catchment_id("1")


class TestExtremaTable:

    def test_rows_indexed_from_one(self, tmp_path):
        path = tmp_path / EXTREMA_FILENAME
        pd.DataFrame({
            'FID': [0, 1, 2],
            'minimum': [100, 200, 300],
            'maximum': [500, 600, 700],
        }).to_csv(path, index=False)

        extrema = load_extrema_table(path)

        assert list(extrema.index) == [1, 2, 3]
        assert list(extrema.columns) == ['minimum', 'maximum']
        assert get_catchment_extrema(extrema, 2) == (200.0, 600.0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_extrema_table(tmp_path / "nope.csv")

    def test_missing_columns(self, tmp_path):
        path = tmp_path / EXTREMA_FILENAME
        pd.DataFrame({'min': [1], 'max': [2]}).to_csv(path, index=False)
        with pytest.raises(MalformedTableError):
            load_extrema_table(path)

    def test_absent_row(self, scenario_dir):
        extrema = load_extrema_table(scenario_dir / EXTREMA_FILENAME)
        with pytest.raises(MissingDataError):
            get_catchment_extrema(extrema, 2)

    def test_incomplete_row(self, tmp_path):
        path = tmp_path / EXTREMA_FILENAME
        pd.DataFrame({'minimum': [1, None], 'maximum': [2, 3]}).to_csv(path, index=False)
        extrema = load_extrema_table(path)
        with pytest.raises(MissingDataError):
            get_catchment_extrema(extrema, 2)

    def test_coverage_lists_missing_indices(self, scenario_dir):
        extrema = load_extrema_table(scenario_dir / EXTREMA_FILENAME)
        validate_extrema_coverage(extrema, 1)
        with pytest.raises(MissingDataError, match=r"\[2, 3\]"):
            validate_extrema_coverage(extrema, 3)


class TestCatchmentTable:

    def test_keeps_only_required_columns(self, scenario_dir):
        table = load_catchment_table("C001", scenario_dir)

        assert list(table.columns) == ['ELEV', 'AREA_GEO']
        assert table['ELEV'].tolist() == [1000, 1250, 1500, 1750, 2000]
        assert table['AREA_GEO'].sum() == 90

    def test_missing_file(self, scenario_dir):
        with pytest.raises(FileNotFoundError):
            load_catchment_table("C002", scenario_dir)

    def test_missing_column(self, tmp_path):
        pd.DataFrame({'ELEV': [1, 2]}).to_csv(tmp_path / "C001.csv", index=False)
        with pytest.raises(MalformedTableError, match="AREA_GEO"):
            load_catchment_table("C001", tmp_path)

    def test_non_numeric_value(self, tmp_path):
        pd.DataFrame({'ELEV': [1, 2, 3], 'AREA_GEO': [1, 'x', 3]}).to_csv(
            tmp_path / "C001.csv", index=False)
        with pytest.raises(MalformedTableError):
            load_catchment_table("C001", tmp_path)

    def test_negative_area(self, tmp_path):
        pd.DataFrame({'ELEV': [1, 2, 3], 'AREA_GEO': [1, -2, 3]}).to_csv(
            tmp_path / "C001.csv", index=False)
        with pytest.raises(MalformedTableError, match="negative"):
            load_catchment_table("C001", tmp_path)

    def test_descending_elevation(self, tmp_path):
        pd.DataFrame({'ELEV': [3, 2, 1], 'AREA_GEO': [1, 2, 3]}).to_csv(
            tmp_path / "C001.csv", index=False)
        with pytest.raises(MalformedTableError, match="ascending"):
            load_catchment_table("C001", tmp_path)

    def test_empty_file(self, tmp_path):
        (tmp_path / "C001.csv").write_text("")
        with pytest.raises(MalformedTableError):
            load_catchment_table("C001", tmp_path)

    def test_non_utf8_file(self, tmp_path):
        (tmp_path / "C001.csv").write_bytes(
            "ELEV,AREA_GEO,NOM\n1,1,été\n2,1,forêt\n".encode("latin-1"))
        with pytest.raises(MalformedTableError, match="C001"):
            load_catchment_table("C001", tmp_path)


def test_synthetic_dataset_is_complete(synthetic_dir):
    check = quick_data_check(synthetic_dir)

    assert check['extrema_ok']
    assert check['missing'] == []


def test_quick_data_check_reports_missing(small_synthetic_dir):
    (small_synthetic_dir / "C003.csv").unlink()

    check = quick_data_check(small_synthetic_dir, n_catchments=5)

    assert check['missing'] == ["C003"]
