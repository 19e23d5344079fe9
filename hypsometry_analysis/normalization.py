"""
Normalization Module for Catchment Hypsometry Analysis
=======================================================

Rescales each catchment onto the dimensionless hypsometric domain so that
catchments of different size and relief can be compared.

Core Concept:
    Relative elevation  h/H = (ELEV - min) / (max - min)
    Relative area       a/A = cumulative AREA_GEO / total AREA_GEO

Both lie in [0, 1] by construction. The cumulative area runs from the
lowest elevation class upwards, so the last class always reaches 1.0.
"""

import numpy as np
import pandas as pd

from .config import COLS
from .exceptions import DegenerateRangeError


def normalize_elevation(elevation, minimum, maximum):
    """
    Min-max scale elevations using the catchment extrema.

    Raises
    ------
    DegenerateRangeError
        If maximum <= minimum (the range would divide by zero or flip sign)
    """
    relief = maximum - minimum
    if not relief > 0:
        raise DegenerateRangeError(
            f"Elevation range is degenerate (minimum={minimum}, maximum={maximum})"
        )
    return (np.asarray(elevation, dtype=float) - minimum) / relief


def normalize_cumulative_area(area):
    """
    Cumulative relative area, non-decreasing with a final value of exactly 1.

    Raises
    ------
    DegenerateRangeError
        If the total area is zero
    """
    area = np.asarray(area, dtype=float)
    cumulative = np.cumsum(area)
    total = cumulative[-1] if len(cumulative) else 0.0
    if not total > 0:
        raise DegenerateRangeError("Total catchment area is zero")

    relative = cumulative / total
    # cumsum/total can land one ulp off 1.0
    relative[-1] = 1.0
    return relative


def normalize_catchment(table, minimum, maximum):
    """
    Compute the normalized hypsometric samples of one catchment.

    Parameters
    ----------
    table : DataFrame
        Output of load_catchment_table() with ELEV and AREA_GEO columns,
        ascending by elevation
    minimum, maximum : float
        Catchment elevation extrema from the extrema table

    Returns
    -------
    DataFrame
        Input columns plus AREA_NORM and ELEV_NORM, same rows and order
    """
    result = table.copy()
    result[COLS['area_norm']] = normalize_cumulative_area(table[COLS['area']])
    result[COLS['elev_norm']] = normalize_elevation(table[COLS['elevation']], minimum, maximum)
    return result


def total_area(table):
    """Planar area of the whole catchment."""
    return float(pd.to_numeric(table[COLS['area']]).sum())
