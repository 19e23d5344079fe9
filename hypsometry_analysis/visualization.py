"""
Visualization Module for Catchment Hypsometry Analysis
=======================================================

This module provides plotting functions for:
- Per-catchment normalized hypsometric curves with fitted polynomial
- The population distribution of hypsometric integrals (histogram + density)

All plot functions return (fig, ax) and save only when save_path is given.
Write failures raise PlotWriteError so the pipeline can report them and
continue with the next catchment.
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from scipy import stats

from .config import (
    PLOT_STYLE, PLOT_PARAMS, COLORS, COLS, HI_BIN_WIDTH, HI_XLIM, HI_DECIMALS
)
from .curve_fitting import evaluate_fit
from .exceptions import PlotWriteError


# ============================================================================
# PLOT SETUP
# ============================================================================

def setup_plot_style():
    """Apply publication-quality plot settings."""
    try:
        plt.style.use(PLOT_STYLE)
    except OSError:
        plt.style.use('default')
    plt.rcParams.update(PLOT_PARAMS)


def save_figure(fig, save_path):
    """
    Save a figure, raising PlotWriteError if it cannot be written.

    Returns
    -------
    Path
    """
    save_path = Path(save_path)
    try:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')
    except OSError as e:
        raise PlotWriteError(f"Could not write figure {save_path}: {e}") from e
    return save_path


def hi_histogram_bins(hi_values, bin_width=HI_BIN_WIDTH):
    """
    Bin edges of fixed width covering all HI values.

    Edges are multiples of bin_width rounded to 10 decimals, so a value
    sitting on an edge (0.69, 0.80) matches it exactly and is counted.
    """
    hi_values = np.asarray(hi_values, dtype=float)
    lo, hi = hi_values.min(), hi_values.max()

    first = int(np.floor(lo / bin_width))
    last = max(int(np.ceil(hi / bin_width)), first + 1)
    edges = np.round(np.arange(first, last + 1) * bin_width, 10)

    # Division error can leave an extreme value just outside the range
    if edges[0] > lo:
        edges = np.round(np.concatenate([[edges[0] - bin_width], edges]), 10)
    if edges[-1] < hi:
        edges = np.round(np.concatenate([edges, [edges[-1] + bin_width]]), 10)
    return edges


# ============================================================================
# PER-CATCHMENT CURVE
# ============================================================================

def plot_hypsometric_curve(normalized, code, index, hi, fit=None,
                           figsize=(7, 6), save_path=None):
    """
    Plot the normalized hypsometric curve of one catchment.

    Parameters
    ----------
    normalized : DataFrame
        Output of normalize_catchment() with AREA_NORM and ELEV_NORM
    code : str
        Catchment code, e.g. 'C001'
    index : int
        Catchment sequence number
    hi : float
        Hypsometric integral
    fit : dict, optional
        Output of fit_hypsometric_curve(); overlays the fitted polynomial
    figsize : tuple
    save_path : str, optional
        If provided, save figure to this path

    Returns
    -------
    tuple
        (fig, ax)
    """
    setup_plot_style()
    fig, ax = plt.subplots(figsize=figsize)

    x = normalized[COLS['area_norm']]
    y = normalized[COLS['elev_norm']]

    ax.plot(x, y, 'o-', linewidth=2, markersize=5,
            color=COLORS['curve'], label='Observed')

    if fit is not None:
        x_fit = np.linspace(0, 1, 101)
        ax.plot(x_fit, evaluate_fit(fit, x_fit), '--', linewidth=1.5,
                color=COLORS['fit'], label='Cubic fit')
        ax.legend(loc='lower right')

    ax.annotate(f'{code}\nHI = {hi:.{HI_DECIMALS}f}',
                xy=(0.05, 0.95), xycoords='axes fraction',
                ha='left', va='top', fontsize=12,
                bbox=dict(boxstyle='round', facecolor='white', alpha=0.8))

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1.05)
    ax.set_xlabel('Relative area (a/A)', fontsize=14)
    ax.set_ylabel('Relative elevation (h/H)', fontsize=14)
    ax.set_title(f'Hypsometric curve {index}: {code}', fontsize=16, fontweight='bold')

    plt.tight_layout()

    if save_path:
        try:
            save_figure(fig, save_path)
        except PlotWriteError:
            plt.close(fig)
            raise

    return fig, ax


# ============================================================================
# POPULATION SUMMARY
# ============================================================================

def plot_hi_distribution(hi_values, figsize=(10, 6), save_path=None):
    """
    Histogram and density of hypsometric integrals across catchments.

    Histogram bins are HI_BIN_WIDTH wide on a density scale, overlaid with
    a Gaussian kernel density estimate and a vertical line at the mean.
    The x-axis is fixed to HI_XLIM so runs are visually comparable.

    Parameters
    ----------
    hi_values : array-like
        Hypsometric integrals of the computed catchments
    figsize : tuple
    save_path : str, optional

    Returns
    -------
    tuple
        (fig, ax)
    """
    hi_values = np.asarray(hi_values, dtype=float)
    hi_values = hi_values[np.isfinite(hi_values)]
    if len(hi_values) == 0:
        raise ValueError("No hypsometric integrals to plot")

    setup_plot_style()
    fig, ax = plt.subplots(figsize=figsize)

    ax.hist(hi_values, bins=hi_histogram_bins(hi_values), density=True,
            color=COLORS['histogram'], edgecolor='black', alpha=0.8,
            label=f'n = {len(hi_values)}')

    # KDE is undefined for a single distinct value
    if len(np.unique(hi_values)) > 1:
        kde = stats.gaussian_kde(hi_values)
        x_grid = np.linspace(HI_XLIM[0], HI_XLIM[1], 400)
        ax.plot(x_grid, kde(x_grid), linewidth=2, color=COLORS['density'],
                label='Density')

    mean_hi = hi_values.mean()
    ax.axvline(mean_hi, color=COLORS['mean'], linestyle='--', linewidth=2,
               label=f'Mean = {mean_hi:.{HI_DECIMALS}f}')

    ax.set_xlim(*HI_XLIM)
    ax.set_xlabel('Hypsometric integral', fontsize=14)
    ax.set_ylabel('Density', fontsize=14)
    ax.set_title('Hypsometric integrals of all catchments', fontsize=16, fontweight='bold')
    ax.legend(loc='upper right')

    plt.tight_layout()

    if save_path:
        try:
            save_figure(fig, save_path)
        except PlotWriteError:
            plt.close(fig)
            raise

    return fig, ax
