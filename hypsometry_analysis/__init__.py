"""
Catchment Hypsometry Analysis Package
======================================

A Python package for computing hypsometric curves and hypsometric
integrals of the sub-catchments of a watershed.

Core Method: each catchment's elevation classes are rescaled to relative
elevation and cumulative relative area, a cubic polynomial is fitted, and
its integral over [0, 1] gives the hypsometric integral (HI).

Modules:
    config         - Configuration settings and paths
    exceptions     - Error classes of the pipeline
    data_loading   - Load extrema and per-catchment tables
    normalization  - Relative elevation and cumulative relative area
    curve_fitting  - Cubic OLS fit and fit-quality check
    integration    - Closed-form hypsometric integral
    visualization  - Curve and distribution plots
    aggregation    - Result store, summary and failure tables
    main           - Orchestration and pipeline

Quick Start:
    >>> from hypsometry_analysis import run_full_analysis
    >>> results = run_full_analysis(data_dir='data', output_dir='outputs')
    >>> results['summary'].head()
"""

__version__ = '0.1.0'

# Import key functions for convenient access
from .config import (
    COLS, N_CATCHMENTS, ensure_output_dir, print_config_summary
)

from .exceptions import (
    HypsometryError,
    MissingDataError,
    MalformedTableError,
    DegenerateRangeError,
    InsufficientDataError,
    PlotWriteError,
    MissingResultError
)

from .data_loading import (
    catchment_id,
    load_extrema_table,
    get_catchment_extrema,
    validate_extrema_coverage,
    load_catchment_table,
    quick_data_check,
    write_synthetic_dataset
)

from .normalization import (
    normalize_catchment,
    normalize_elevation,
    normalize_cumulative_area
)

from .curve_fitting import (
    fit_hypsometric_curve,
    assess_fit_quality
)

from .integration import (
    hypsometric_integral,
    integrate_polynomial
)

from .visualization import (
    plot_hypsometric_curve,
    plot_hi_distribution,
    setup_plot_style
)

from .aggregation import (
    CatchmentResult,
    ResultStore,
    build_summary_table,
    build_failure_table,
    summarize_hi_distribution
)

from .main import (
    process_catchment,
    run_full_analysis,
    analyze_catchment
)
