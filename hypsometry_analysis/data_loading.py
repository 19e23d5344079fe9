"""
Data Loading Module for Catchment Hypsometry Analysis
======================================================

This module handles loading the tabular inputs exported from GIS:
- Minimum-Maximum.csv: elevation extrema, one row per catchment index
- C001.csv ... C093.csv: elevation classes and their planar area

Key Features:
- Canonical catchment codes from integer indices
- Column validation (all other columns are discarded)
- Data quality checks (NaN, negative areas, elevation ordering)

Dependencies:
- pandas
- numpy
"""

import os
import numpy as np
import pandas as pd
from pathlib import Path

from .config import (
    DATA_DIR, EXTREMA_FILENAME, N_CATCHMENTS, ID_PREFIX, ID_DIGITS, COLS,
    get_extrema_path
)
from .exceptions import MissingDataError, MalformedTableError


# ============================================================================
# CATCHMENT CODES
# ============================================================================

def catchment_id(index):
    """
    Format a catchment index as its canonical code.

    Parameters
    ----------
    index : int
        Catchment index, starting at 1

    Returns
    -------
    str
        Code such as 'C001' (index 1) or 'C093' (index 93)
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise TypeError(f"Catchment index must be an integer, got {index!r}")
    if index < 1 or index >= 10 ** ID_DIGITS:
        raise ValueError(f"Catchment index out of range: {index}")
    return f"{ID_PREFIX}{int(index):0{ID_DIGITS}d}"


def get_catchment_path(code, data_dir=DATA_DIR):
    """Get path of the per-catchment table for a catchment code."""
    return Path(data_dir) / f"{code}.csv"


def _read_table(path, required, table_name):
    """Read a CSV and coerce the required columns to float."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"{table_name} not found: {path}")

    try:
        df = pd.read_csv(path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise MalformedTableError(f"Cannot parse {table_name} {path}: {e}") from e

    missing = [col for col in required if col not in df.columns]
    if missing:
        raise MalformedTableError(
            f"{table_name} {path} is missing column(s) {missing}. "
            f"Available: {list(df.columns)}"
        )

    df = df[required].apply(pd.to_numeric, errors='coerce')
    return df


# ============================================================================
# EXTREMA TABLE
# ============================================================================

def load_extrema_table(path=None):
    """
    Load the per-catchment elevation extrema.

    Parameters
    ----------
    path : str or Path, optional
        Path to Minimum-Maximum.csv (uses config default if None)

    Returns
    -------
    DataFrame
        Columns: minimum, maximum. Indexed by catchment index 1..n
        (row i of the file is catchment i).

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    MalformedTableError
        If the minimum/maximum columns are absent
    """
    if path is None:
        path = get_extrema_path()

    required = [COLS['minimum'], COLS['maximum']]
    extrema = _read_table(path, required, "Extrema table")
    extrema.index = pd.RangeIndex(1, len(extrema) + 1, name='index')
    return extrema


def get_catchment_extrema(extrema, index):
    """
    Look up the (minimum, maximum) elevation of one catchment.

    Raises
    ------
    MissingDataError
        If there is no row for the index, or the row holds NaN
    """
    if index not in extrema.index:
        raise MissingDataError(
            f"No extrema row for catchment {index} "
            f"(table has {len(extrema)} rows)"
        )

    row = extrema.loc[index]
    minimum = row[COLS['minimum']]
    maximum = row[COLS['maximum']]
    if pd.isna(minimum) or pd.isna(maximum):
        raise MissingDataError(f"Extrema row for catchment {index} is incomplete")

    return float(minimum), float(maximum)


def validate_extrema_coverage(extrema, n_catchments=N_CATCHMENTS):
    """
    Check that every catchment 1..n_catchments has a complete extrema row.

    Raises
    ------
    MissingDataError
        Listing every absent or incomplete index
    """
    absent = []
    for index in range(1, n_catchments + 1):
        try:
            get_catchment_extrema(extrema, index)
        except MissingDataError:
            absent.append(index)

    if absent:
        raise MissingDataError(
            f"Extrema missing for {len(absent)} of {n_catchments} catchments: {absent}"
        )


# ============================================================================
# CATCHMENT TABLES
# ============================================================================

def load_catchment_table(code, data_dir=DATA_DIR):
    """
    Load the elevation-class table of one catchment.

    Parameters
    ----------
    code : str
        Catchment code, e.g. 'C001'
    data_dir : str or Path
        Folder holding the per-catchment CSV files

    Returns
    -------
    DataFrame
        Columns: ELEV, AREA_GEO (floats), in file order

    Raises
    ------
    FileNotFoundError
        If <code>.csv does not exist
    MalformedTableError
        If columns are missing, values are not numeric, areas are negative,
        or elevations are not ascending
    """
    elev_col = COLS['elevation']
    area_col = COLS['area']
    path = get_catchment_path(code, data_dir)

    table = _read_table(path, [elev_col, area_col], f"Catchment table {code}")

    if table.isna().any().any():
        bad_rows = table.index[table.isna().any(axis=1)].tolist()
        raise MalformedTableError(
            f"Catchment table {code} has missing or non-numeric values in rows {bad_rows}"
        )
    if (table[area_col] < 0).any():
        raise MalformedTableError(f"Catchment table {code} has negative {area_col} values")
    if not table[elev_col].is_monotonic_increasing:
        raise MalformedTableError(
            f"Catchment table {code}: {elev_col} must be in ascending order"
        )

    return table.reset_index(drop=True)


# ============================================================================
# DATA CHECKS
# ============================================================================

def quick_data_check(data_dir=DATA_DIR, n_catchments=N_CATCHMENTS):
    """
    Perform quick check of all input tables.
    Useful for initial validation that everything is accessible.

    Returns
    -------
    dict
        'extrema_ok' flag and the list of 'missing' catchment codes
    """
    print("\n" + "=" * 60)
    print("DATA AVAILABILITY CHECK")
    print("=" * 60)

    extrema_path = Path(data_dir) / EXTREMA_FILENAME
    extrema_ok = False

    print("\n[1] Extrema table:")
    if os.path.exists(extrema_path):
        try:
            extrema = load_extrema_table(extrema_path)
            print(f"  ✓ Found: {extrema_path} ({len(extrema)} rows)")
            validate_extrema_coverage(extrema, n_catchments)
            print(f"  ✓ Rows present for catchments 1-{n_catchments}")
            extrema_ok = True
        except (MalformedTableError, MissingDataError) as e:
            print(f"  ✗ {e}")
    else:
        print(f"  ✗ NOT FOUND: {extrema_path}")

    print("\n[2] Catchment tables:")
    missing = []
    for index in range(1, n_catchments + 1):
        code = catchment_id(index)
        if not get_catchment_path(code, data_dir).exists():
            missing.append(code)

    print(f"  ✓ {n_catchments - len(missing)} of {n_catchments} found")
    if missing:
        print(f"  ✗ Missing: {', '.join(missing)}")

    print("\n" + "=" * 60)

    return {'extrema_ok': extrema_ok, 'missing': missing}


# ============================================================================
# SYNTHETIC DATA
# ============================================================================

def write_synthetic_dataset(data_dir, n_catchments=N_CATCHMENTS, n_classes=12):
    """
    Write a self-consistent synthetic dataset for demonstrations and tests.

    Each catchment i gets evenly spaced elevation classes between its
    minimum and maximum, with class areas chosen so that the normalized
    curve follows ELEV_NORM = AREA_NORM ** gamma, gamma varying from 0.3
    (young, convex) to 1.0 (straight) across the catchments.

    Parameters
    ----------
    data_dir : str or Path
        Folder to write into (created if needed)
    n_catchments : int
    n_classes : int
        Elevation classes per catchment

    Returns
    -------
    Path
        The data folder
    """
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    extrema_rows = []
    steps = np.linspace(0.0, 1.0, n_classes)

    for index in range(1, n_catchments + 1):
        minimum = 200.0 + 5.0 * index
        maximum = minimum + 300.0 + 10.0 * index
        gamma = 0.3 + 0.7 * (index - 1) / max(n_catchments - 1, 1)
        total_area = 5.0 + 0.5 * index

        cumulative = steps ** (1.0 / gamma)
        areas = np.diff(cumulative, prepend=0.0) * total_area

        table = pd.DataFrame({
            'OBJECTID': np.arange(1, n_classes + 1),
            COLS['elevation']: minimum + steps * (maximum - minimum),
            COLS['area']: areas,
        })
        table.to_csv(get_catchment_path(catchment_id(index), data_dir), index=False)
        extrema_rows.append({COLS['minimum']: minimum, COLS['maximum']: maximum})

    pd.DataFrame(extrema_rows).to_csv(data_dir / EXTREMA_FILENAME, index=False)
    return data_dir


if __name__ == "__main__":
    # Run quick data check when module is executed directly
    quick_data_check()
