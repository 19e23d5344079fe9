"""
Aggregation Module for Catchment Hypsometry Analysis
=====================================================

Collects per-catchment results in an explicit, ordered store and turns
them into the summary table, the failure table, and a distribution
summary of hypsometric integrals.

Failed catchments stay in the summary table with STATUS = 'failed' so a
reader can see which rows were not computed, rather than having them
silently dropped.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from .config import AREA_DECIMALS, HI_DECIMALS, SUMMARY_COLUMNS
from .exceptions import MissingResultError

STATUS_COMPUTED = 'computed'
STATUS_FAILED = 'failed'


@dataclass(frozen=True, eq=False)
class CatchmentResult:
    """Outcome of the pipeline for one catchment."""

    index: int
    code: str
    status: str
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    total_area: Optional[float] = None
    normalized: Optional[pd.DataFrame] = None
    fit: Optional[Dict[str, Any]] = None
    hypsometric_integral: Optional[float] = None
    low_fit_quality: bool = False
    figure_path: Optional[str] = None
    plot_error: Optional[str] = None
    failed_stage: Optional[str] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def computed(self) -> bool:
        return self.status == STATUS_COMPUTED


class ResultStore:
    """
    Ordered store of catchment results keyed by catchment index.

    Passed explicitly through the pipeline; holds at most one result per
    index (a rerun replaces the earlier result).
    """

    def __init__(self):
        self._results: Dict[int, CatchmentResult] = {}

    def add(self, result: CatchmentResult) -> None:
        self._results[result.index] = result

    def get(self, index: int) -> CatchmentResult:
        try:
            return self._results[index]
        except KeyError:
            raise MissingResultError(f"No result recorded for catchment {index}") from None

    def __contains__(self, index) -> bool:
        return index in self._results

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self):
        for index in sorted(self._results):
            yield self._results[index]

    def computed(self) -> List[CatchmentResult]:
        return [r for r in self if r.computed]

    def failed(self) -> List[CatchmentResult]:
        return [r for r in self if not r.computed]


def _round_or_nan(value, decimals):
    return np.nan if value is None else round(float(value), decimals)


def build_summary_table(store: ResultStore, indices: Optional[Iterable[int]] = None) -> pd.DataFrame:
    """
    Build the summary table, one row per catchment in index order.

    Parameters
    ----------
    store : ResultStore
    indices : iterable of int, optional
        Catchments to include (default: every catchment in the store)

    Returns
    -------
    DataFrame
        Columns: CODE, MIN_ELEV, MAX_ELEV, AREA, H_INTEGRAL, STATUS,
        R_SQUARED, LOW_FIT_QUALITY, ERROR

    Raises
    ------
    MissingResultError
        If a requested catchment has no recorded result
    """
    if indices is None:
        indices = [r.index for r in store]

    rows = []
    for index in indices:
        result = store.get(index)
        fit = result.fit or {}
        rows.append({
            'CODE': result.code,
            'MIN_ELEV': _round_or_nan(result.minimum, 2),
            'MAX_ELEV': _round_or_nan(result.maximum, 2),
            'AREA': _round_or_nan(result.total_area, AREA_DECIMALS),
            'H_INTEGRAL': _round_or_nan(result.hypsometric_integral, HI_DECIMALS),
            'STATUS': result.status,
            'R_SQUARED': _round_or_nan(fit.get('r_squared'), 4),
            'LOW_FIT_QUALITY': result.low_fit_quality,
            'ERROR': result.error_message or '',
        })

    columns = SUMMARY_COLUMNS + ['STATUS', 'R_SQUARED', 'LOW_FIT_QUALITY', 'ERROR']
    return pd.DataFrame(rows, columns=columns)


def build_failure_table(store: ResultStore) -> pd.DataFrame:
    """Failed catchments with the stage and reason of failure."""
    rows = [{
        'CODE': r.code,
        'STAGE': r.failed_stage,
        'ERROR_TYPE': r.error_type,
        'MESSAGE': r.error_message,
    } for r in store.failed()]
    return pd.DataFrame(rows, columns=['CODE', 'STAGE', 'ERROR_TYPE', 'MESSAGE'])


def summarize_hi_distribution(store: ResultStore) -> Dict[str, float]:
    """
    Distribution statistics of the computed hypsometric integrals.

    Uses the unrounded integrals held in the store; rounding is left to
    the report.

    Returns
    -------
    dict
        n, mean, std, min, q25, median, q75, max (NaN when n == 0)
    """
    hi = pd.Series([r.hypsometric_integral for r in store.computed()], dtype=float)

    if len(hi) == 0:
        return {'n': 0, **{k: np.nan for k in
                           ['mean', 'std', 'min', 'q25', 'median', 'q75', 'max']}}

    return {
        'n': int(len(hi)),
        'mean': float(hi.mean()),
        'std': float(hi.std()) if len(hi) > 1 else np.nan,
        'min': float(hi.min()),
        'q25': float(hi.quantile(0.25)),
        'median': float(hi.median()),
        'q75': float(hi.quantile(0.75)),
        'max': float(hi.max()),
    }
