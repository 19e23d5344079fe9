"""
Catchment Hypsometry Analysis - Main Orchestration Script
==========================================================

This script provides the main entry point for running the hypsometric
analysis of all sub-catchments. It can be run directly or individual
functions can be called interactively in Spyder/IPython.

Usage:
    # Run full analysis
    python -m hypsometry_analysis.main --data-dir data --output-dir outputs

    # Or import and run specific steps:
    from hypsometry_analysis.main import *
    extrema = load_extrema_table('data/Minimum-Maximum.csv')
    result = process_catchment(1, extrema, data_dir='data')

Pipeline per catchment:
    Loaded -> Normalized -> Fitted -> Integrated -> Plotted -> Aggregated
"""

import sys
import time
from pathlib import Path

import pandas as pd
import matplotlib.pyplot as plt


# ============================================================================
# PROGRESS OUTPUT
# ============================================================================

def _bar(fraction, width):
    filled = int(width * fraction)
    return "█" * filled + "░" * (width - filled)


class ProgressBar:
    """
    Text progress bar over the catchment loop.

    Usage:
        progress = ProgressBar(total=93, desc="Catchments")
        for index in range(1, 94):
            # process catchment
            progress.update()
        progress.close()
    """

    def __init__(self, total, desc="Progress", width=40, enabled=True):
        self.total = total
        self.desc = desc
        self.width = width
        self.enabled = enabled
        self.current = 0

    def update(self, n=1):
        self.current += n
        if self.enabled and self.total > 0:
            print(f"\r  {self.desc}: |{_bar(self.current / self.total, self.width)}| "
                  f"{self.current}/{self.total}", end="", flush=True)

    def close(self):
        if self.enabled:
            print(f"\r  {self.desc}: {self.current} of {self.total} done" + " " * self.width)


def print_step_header(step_num, total_steps, title):
    """Print a formatted step header with progress."""
    print(f"\n[{_bar(step_num / total_steps, 30)}] Step {step_num}/{total_steps}")
    print("-" * 60)
    print(f"  {title}")
    print("-" * 60)


# Import project modules
from .config import (
    DATA_DIR, OUTPUT_DIR, N_CATCHMENTS, COLS, SUMMARY_COLUMNS,
    SUMMARY_PLOT_FILENAME, SUMMARY_TABLE_FILENAME, FAILURE_TABLE_FILENAME,
    REPORT_FILENAME, HI_DECIMALS, R2_WARNING_THRESHOLD,
    ensure_output_dir, get_extrema_path, print_config_summary
)
from .exceptions import (
    MalformedTableError, DegenerateRangeError, InsufficientDataError,
    PlotWriteError
)
from .data_loading import (
    catchment_id, load_extrema_table, get_catchment_extrema,
    validate_extrema_coverage, load_catchment_table, quick_data_check
)
from .normalization import normalize_catchment, total_area
from .curve_fitting import fit_hypsometric_curve, assess_fit_quality
from .integration import hypsometric_integral
from .visualization import plot_hypsometric_curve, plot_hi_distribution
from .aggregation import (
    CatchmentResult, ResultStore, STATUS_COMPUTED, STATUS_FAILED,
    build_summary_table, build_failure_table, summarize_hi_distribution
)


# Per-catchment data errors: these fail one catchment, not the run
CATCHMENT_ERRORS = (
    FileNotFoundError, MalformedTableError, DegenerateRangeError, InsufficientDataError
)


# ============================================================================
# PER-CATCHMENT PIPELINE
# ============================================================================

def process_catchment(index, extrema, data_dir=DATA_DIR, output_dir=OUTPUT_DIR,
                      save_figures=True, fail_fast=False, verbose=False):
    """
    Run the full pipeline for one catchment.

    Steps:
    1. Load the elevation-class table and extrema
    2. Normalize elevation and cumulative area
    3. Fit the cubic hypsometric polynomial
    4. Integrate it over [0, 1]
    5. Plot the normalized curve to <code>.png

    Parameters
    ----------
    index : int
        Catchment index (1-based)
    extrema : DataFrame
        Output of load_extrema_table()
    data_dir : str
        Folder with the per-catchment CSV files
    output_dir : str
        Folder for the curve image
    save_figures : bool
    fail_fast : bool
        If True, re-raise data errors instead of recording a failed result
    verbose : bool

    Returns
    -------
    CatchmentResult
        status 'computed', or 'failed' with the failing stage and message

    Raises
    ------
    MissingDataError
        If the extrema table has no row for the index (always fatal)
    """
    code = catchment_id(index)
    minimum, maximum = get_catchment_extrema(extrema, index)
    stage = 'load'

    try:
        table = load_catchment_table(code, data_dir)
        area = total_area(table)

        stage = 'normalize'
        normalized = normalize_catchment(table, minimum, maximum)

        stage = 'fit'
        fit = fit_hypsometric_curve(normalized[COLS['area_norm']],
                                    normalized[COLS['elev_norm']])

        stage = 'integrate'
        hi = hypsometric_integral(fit['coefficients'])

    except CATCHMENT_ERRORS as e:
        if fail_fast:
            raise
        if verbose:
            print(f"\n  [ERROR] {code} failed at '{stage}': {e}")
        return CatchmentResult(
            index=index, code=code, status=STATUS_FAILED,
            minimum=minimum, maximum=maximum,
            failed_stage=stage, error_type=type(e).__name__, error_message=str(e),
        )

    low_fit_quality = assess_fit_quality(fit, code)

    figure_path = None
    plot_error = None
    if save_figures:
        save_path = Path(output_dir) / f"{code}.png"
        try:
            fig, ax = plot_hypsometric_curve(normalized, code, index, hi,
                                             fit=fit, save_path=save_path)
            plt.close(fig)
            figure_path = str(save_path)
        except PlotWriteError as e:
            plot_error = str(e)
            print(f"\n  [WARNING] {e}")

    return CatchmentResult(
        index=index, code=code, status=STATUS_COMPUTED,
        minimum=minimum, maximum=maximum, total_area=area,
        normalized=normalized, fit=fit, hypsometric_integral=hi,
        low_fit_quality=low_fit_quality,
        figure_path=figure_path, plot_error=plot_error,
    )


# ============================================================================
# REPORTING
# ============================================================================

def format_report(summary, failures, distribution):
    """
    Render the plain-text report: summary table, HI distribution, failures.

    Returns
    -------
    str
    """
    lines = []
    lines.append("=" * 70)
    lines.append("HYPSOMETRIC INTEGRALS OF SUB-CATCHMENTS")
    lines.append("=" * 70)
    lines.append("")

    computed = summary[summary['STATUS'] == STATUS_COMPUTED]
    lines.append(f"Catchments computed: {len(computed)} of {len(summary)}")
    lines.append("")

    table = summary[SUMMARY_COLUMNS + ['STATUS']].copy()
    table['H_INTEGRAL'] = table['H_INTEGRAL'].map(
        lambda v: '--' if pd.isna(v) else f"{v:.{HI_DECIMALS}f}"
    )
    lines.append(table.to_string(index=False, na_rep='--',
                                 float_format=lambda v: f"{v:.2f}"))
    lines.append("")

    lines.append("-" * 70)
    lines.append("HYPSOMETRIC INTEGRAL DISTRIBUTION")
    lines.append("-" * 70)
    if distribution['n'] > 0:
        lines.append(f"  n:      {distribution['n']}")
        lines.append(f"  Min:    {distribution['min']:.3f}")
        lines.append(f"  Q1:     {distribution['q25']:.3f}")
        lines.append(f"  Median: {distribution['median']:.3f}")
        lines.append(f"  Mean:   {distribution['mean']:.3f}")
        lines.append(f"  Q3:     {distribution['q75']:.3f}")
        lines.append(f"  Max:    {distribution['max']:.3f}")
        if pd.notna(distribution['std']):
            lines.append(f"  Std:    {distribution['std']:.3f}")
    else:
        lines.append("  No catchments computed.")
    lines.append("")

    low_fit = computed[computed['LOW_FIT_QUALITY'].astype(bool)]
    if len(low_fit) > 0:
        lines.append(f"Low fit quality (R² < {R2_WARNING_THRESHOLD}): "
                     f"{', '.join(low_fit['CODE'])}")
        lines.append("")

    lines.append("-" * 70)
    lines.append("FAILED CATCHMENTS")
    lines.append("-" * 70)
    if len(failures) > 0:
        for _, row in failures.iterrows():
            lines.append(f"  {row['CODE']} [{row['STAGE']}] {row['ERROR_TYPE']}: {row['MESSAGE']}")
    else:
        lines.append("  None")
    lines.append("")

    return "\n".join(lines)


def save_results(summary, failures, report, output_dir=OUTPUT_DIR, verbose=True):
    """Write the summary table, failure table and report to output_dir."""
    ensure_output_dir(output_dir)
    paths = {
        'summary': Path(output_dir) / SUMMARY_TABLE_FILENAME,
        'failures': Path(output_dir) / FAILURE_TABLE_FILENAME,
        'report': Path(output_dir) / REPORT_FILENAME,
    }
    summary.to_csv(paths['summary'], index=False)
    failures.to_csv(paths['failures'], index=False)
    paths['report'].write_text(report, encoding='utf-8')

    if verbose:
        for path in paths.values():
            print(f"  Saved: {path}")
    return paths


# ============================================================================
# FULL PIPELINE
# ============================================================================

def run_full_analysis(data_dir=DATA_DIR, output_dir=OUTPUT_DIR,
                      n_catchments=N_CATCHMENTS, save_figures=True,
                      fail_fast=False, verbose=True):
    """
    Run the hypsometric analysis for catchments 1..n_catchments.

    Parameters
    ----------
    data_dir : str
        Folder with Minimum-Maximum.csv and the per-catchment tables
    output_dir : str
        Folder for images, tables and the report
    n_catchments : int
    save_figures : bool
        If False, skip all image output
    fail_fast : bool
        If True, the first catchment data error aborts the run
    verbose : bool

    Returns
    -------
    dict
        'store', 'summary', 'failures', 'distribution', 'report', 'paths',
        'elapsed' (seconds)

    Raises
    ------
    FileNotFoundError, MalformedTableError, MissingDataError
        If the extrema table cannot be loaded or is incomplete
    """
    start = time.time()
    total_steps = 5

    if verbose:
        print("\n" + "=" * 60)
        print("CATCHMENT HYPSOMETRY ANALYSIS")
        print("=" * 60)

    ensure_output_dir(output_dir)

    # Step 1: extrema are shared by every catchment, so any error is fatal
    if verbose:
        print_step_header(1, total_steps, "Loading elevation extrema")
    extrema = load_extrema_table(get_extrema_path(data_dir))
    validate_extrema_coverage(extrema, n_catchments)
    if verbose:
        print(f"  Extrema loaded for {len(extrema)} catchments")

    # Step 2: per-catchment pipeline, strictly in index order
    if verbose:
        print_step_header(2, total_steps, f"Processing {n_catchments} catchments")
    store = ResultStore()
    progress = ProgressBar(total=n_catchments, desc="Catchments", enabled=verbose)
    for index in range(1, n_catchments + 1):
        store.add(process_catchment(
            index, extrema, data_dir=data_dir, output_dir=output_dir,
            save_figures=save_figures, fail_fast=fail_fast, verbose=verbose
        ))
        progress.update()
    progress.close()

    # Step 3: aggregate
    if verbose:
        print_step_header(3, total_steps, "Aggregating results")
    summary = build_summary_table(store, range(1, n_catchments + 1))
    failures = build_failure_table(store)
    distribution = summarize_hi_distribution(store)
    if verbose:
        print(f"  Computed: {distribution['n']}, failed: {len(failures)}")

    # Step 4: population plot
    if verbose:
        print_step_header(4, total_steps, "Plotting HI distribution")
    hi_values = [r.hypsometric_integral for r in store.computed()]
    if save_figures and hi_values:
        save_path = Path(output_dir) / SUMMARY_PLOT_FILENAME
        try:
            fig, ax = plot_hi_distribution(hi_values, save_path=save_path)
            plt.close(fig)
            if verbose:
                print(f"  Figure saved to: {save_path}")
        except PlotWriteError as e:
            print(f"  [WARNING] {e}")
    elif verbose:
        print("  Skipped")

    # Step 5: report
    if verbose:
        print_step_header(5, total_steps, "Writing report")
    report = format_report(summary, failures, distribution)
    paths = save_results(summary, failures, report, output_dir, verbose)

    elapsed = time.time() - start
    if verbose:
        print("\n" + report)
        if len(failures) > 0:
            print(f"[WARNING] {len(failures)} catchment(s) failed; see {paths['failures']}")
        else:
            print("[SUCCESS] All catchments computed!")
        print(f"Completed in {elapsed:.1f}s")

    return {
        'store': store,
        'summary': summary,
        'failures': failures,
        'distribution': distribution,
        'report': report,
        'paths': paths,
        'elapsed': elapsed,
    }


def analyze_catchment(index, data_dir=DATA_DIR, output_dir=OUTPUT_DIR, save_figures=True):
    """
    Run and print the pipeline for a single catchment.

    Returns
    -------
    CatchmentResult
    """
    ensure_output_dir(output_dir)
    extrema = load_extrema_table(get_extrema_path(data_dir))
    result = process_catchment(index, extrema, data_dir=data_dir,
                               output_dir=output_dir, save_figures=save_figures,
                               verbose=True)

    print("\n" + "=" * 60)
    print(f"CATCHMENT {result.code}")
    print("=" * 60)
    print(f"  Elevation range: {result.minimum:.0f}-{result.maximum:.0f} m")
    if result.computed:
        b1, b2, b3 = result.fit['coefficients']
        print(f"  Total area: {result.total_area:,.2f}")
        print(f"  Fit: {b1:.4f}x {b2:+.4f}x² {b3:+.4f}x³ "
              f"(intercept {result.fit['intercept']:+.4f}, R² = {result.fit['r_squared']:.4f})")
        print(f"  Hypsometric integral: {result.hypsometric_integral:.{HI_DECIMALS}f}")
        if result.figure_path:
            print(f"  Figure saved to: {result.figure_path}")
    else:
        print(f"  [ERROR] Failed at '{result.failed_stage}': {result.error_message}")
    return result


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description='Catchment Hypsometry Analysis')
    parser.add_argument('--data-dir', default=DATA_DIR,
                       help=f'Folder with input CSV files (default: {DATA_DIR})')
    parser.add_argument('--output-dir', default=OUTPUT_DIR,
                       help=f'Folder for figures and tables (default: {OUTPUT_DIR})')
    parser.add_argument('--catchment', type=int,
                       help='Process a single catchment index only')
    parser.add_argument('--no-figures', action='store_true',
                       help='Skip writing figures')
    parser.add_argument('--fail-fast', action='store_true',
                       help='Abort on the first catchment data error')
    parser.add_argument('--check', action='store_true',
                       help='Check data availability only')

    args = parser.parse_args()

    if args.check:
        print_config_summary(args.data_dir, args.output_dir)
        quick_data_check(args.data_dir)
    elif args.catchment:
        analyze_catchment(args.catchment, data_dir=args.data_dir,
                          output_dir=args.output_dir,
                          save_figures=not args.no_figures)
    else:
        results = run_full_analysis(
            data_dir=args.data_dir,
            output_dir=args.output_dir,
            save_figures=not args.no_figures,
            fail_fast=args.fail_fast,
        )
        sys.exit(1 if len(results['failures']) > 0 else 0)
