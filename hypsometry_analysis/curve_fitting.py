"""
Curve Fitting Module

Fits the cubic hypsometric model to the normalized samples of a catchment:

    ELEV_NORM = b0 + b1 * AREA_NORM + b2 * AREA_NORM² + b3 * AREA_NORM³

by ordinary least squares on the raw power basis. The intercept b0 is
estimated and reported, but the hypsometric curve passes through the origin
by definition, so only (b1, b2, b3) describe the curve that is integrated.

**Fit quality:**
R² and coefficient p-values are kept with every fit. Catchments whose R²
falls below the configured threshold are flagged and a UserWarning is
emitted; their integral is still reported.
"""

import warnings
import numpy as np
import statsmodels.api as sm
from typing import Dict, Any, Sequence

from .config import POLY_DEGREE, MIN_SAMPLES, R2_WARNING_THRESHOLD
from .exceptions import InsufficientDataError


def design_matrix(x: Sequence[float], degree: int = POLY_DEGREE) -> np.ndarray:
    """Raw power basis [1, x, x², ..., x^degree]."""
    return np.vander(np.asarray(x, dtype=float), degree + 1, increasing=True)


def fit_hypsometric_curve(area_norm: Sequence[float],
                          elev_norm: Sequence[float]) -> Dict[str, Any]:
    """
    Fit the cubic hypsometric polynomial.

    Parameters
    ----------
    area_norm : array-like
        Cumulative relative area (x)
    elev_norm : array-like
        Relative elevation (y)

    Returns
    -------
    dict
        'coefficients' (b1, b2, b3) in the raw power basis, 'intercept',
        'r_squared', 'r_squared_adj', 'p_values' (b0..b3, NaN when there are
        no residual degrees of freedom), 'df_resid' and 'n_samples'

    Raises
    ------
    InsufficientDataError
        Fewer than 4 distinct x values, or a rank-deficient design
    """
    x = np.asarray(area_norm, dtype=float)
    y = np.asarray(elev_norm, dtype=float)

    if x.shape != y.shape:
        raise ValueError(f"Sample length mismatch: {len(x)} x values, {len(y)} y values")

    n_distinct = len(np.unique(x))
    if n_distinct < MIN_SAMPLES:
        raise InsufficientDataError(
            f"Need at least {MIN_SAMPLES} distinct samples for a degree-{POLY_DEGREE} fit, "
            f"got {n_distinct}"
        )

    X = design_matrix(x)
    if np.linalg.matrix_rank(X) < X.shape[1]:
        raise InsufficientDataError("Polynomial design matrix is rank deficient")

    results = sm.OLS(y, X).fit()
    params = np.asarray(results.params, dtype=float)
    df_resid = int(round(results.df_resid))

    # Standard errors need at least one residual degree of freedom
    if df_resid > 0:
        p_values = np.asarray(results.pvalues, dtype=float)
        r_squared_adj = float(results.rsquared_adj)
    else:
        p_values = np.full(len(params), np.nan)
        r_squared_adj = np.nan

    return {
        'intercept': float(params[0]),
        'coefficients': tuple(float(b) for b in params[1:]),
        'r_squared': float(results.rsquared),
        'r_squared_adj': r_squared_adj,
        'p_values': tuple(float(p) for p in p_values),
        'df_resid': df_resid,
        'n_samples': len(x),
    }


def evaluate_fit(fit: Dict[str, Any], x: Sequence[float],
                 include_intercept: bool = True) -> np.ndarray:
    """Evaluate a fitted polynomial at x."""
    x = np.asarray(x, dtype=float)
    b0 = fit['intercept'] if include_intercept else 0.0
    coefficients = np.concatenate([[b0], fit['coefficients']])
    return design_matrix(x, len(coefficients) - 1) @ coefficients


def assess_fit_quality(fit: Dict[str, Any], code: str = '',
                       threshold: float = R2_WARNING_THRESHOLD) -> bool:
    """
    Flag a fit whose R² is below the threshold.

    Returns
    -------
    bool
        True when the fit quality is low (a UserWarning has been emitted)
    """
    r_squared = fit['r_squared']
    low = not (np.isfinite(r_squared) and r_squared >= threshold)
    if low:
        warnings.warn(
            f"Low fit quality for catchment {code}: R² = {r_squared:.3f} "
            f"(threshold {threshold})"
        )
    return low
